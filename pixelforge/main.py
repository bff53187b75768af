from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from pixelforge.core.exceptions import AuthenticationFailed, NexusError
from pixelforge.core.logging import configure_logging, get_logger
from pixelforge.core.middleware import RequestLoggingMiddleware
from pixelforge.core.rate_limit import limiter
from pixelforge.core.settings import Settings, get_settings
from pixelforge.db import Database
from pixelforge.routers import api_router, health
from pixelforge.services.bootstrap import ensure_default_admin
from pixelforge.services.storage import DocumentStorage

logger = get_logger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "Accept", "Origin"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.
    Opens the database and upload storage on startup, releases them on shutdown.
    """
    settings: Settings = app.state.settings

    database = Database(settings.db_url)
    logger.info("application_starting", environment=settings.environment)
    if database.sqlite_path:
        logger.info("using_sqlite_database", path=database.sqlite_path)
    else:
        logger.info("using_database", url=database.engine.url.render_as_string(hide_password=True))
    # Any failure here aborts startup
    database.create_all()
    with database.session() as db:
        ensure_default_admin(db, settings)

    storage = DocumentStorage(settings.upload_dir, settings.max_upload_bytes)
    storage.ensure_root()
    logger.info("upload_storage_ready", path=str(storage.root))

    app.state.database = database
    app.state.storage = storage

    yield

    database.dispose()
    logger.info("application_shutdown")


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NexusError)
    async def nexus_error_handler(request: Request, exc: NexusError):
        response = _error(exc.status_code, exc.message)
        if isinstance(exc, AuthenticationFailed):
            response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        return _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            message,
            details=[{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors],
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return _error(status.HTTP_429_TOO_MANY_REQUESTS, f"Rate limit exceeded. {exc.detail}")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_error", error_type=type(exc).__name__)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title="PixelForge Nexus", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    # Added last so it wraps everything else
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(api_router)
    return app


app = create_app()
