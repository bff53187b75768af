from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from pixelforge.core.logging import get_logger
from pixelforge.db import Database, get_database

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


@router.get("/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "ok", "service": "pixelforge-nexus"}


@router.get("/health/ready")
def readiness_check(database: Database = Depends(get_database)):
    """
    Readiness check - verifies database connectivity.
    Used by container orchestration for readiness probes.
    """
    try:
        database.ping()
    except SQLAlchemyError as e:
        logger.warning("readiness_check_failed", error=str(e))
        return {"status": "not_ready", "database": "disconnected"}
    return {"status": "ready", "database": "connected"}
