from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from pixelforge.core.rate_limit import RATE_LIMITS, limiter
from pixelforge.core.settings import Settings
from pixelforge.db import get_db
from pixelforge.routers.deps import get_app_settings, get_current_user
from pixelforge.schemas import (
    ChangePasswordRequest,
    CurrentUser,
    LoginResponse,
    Token,
    UserLogin,
    UserRead,
)
from pixelforge.services import user_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(RATE_LIMITS["auth_operations"])
def login(
    request: Request,
    payload: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    """Exchange username and password for a bearer token."""
    user = user_service.authenticate(db, payload.username, payload.password, settings)
    return LoginResponse(
        token=user_service.issue_token(user, settings),
        user=UserRead.model_validate(user, from_attributes=True),
    )


@router.post("/token", response_model=Token)
@limiter.limit(RATE_LIMITS["auth_operations"])
def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Token:
    user = user_service.authenticate(db, form_data.username, form_data.password, settings)
    return Token(access_token=user_service.issue_token(user, settings))


@router.get("/me", response_model=CurrentUser)
def read_current_user(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    return current_user


@router.post("/change-password")
@limiter.limit(RATE_LIMITS["password_change"])
def change_password(
    request: Request,
    payload: ChangePasswordRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: CurrentUser = Depends(get_current_user),
):
    user_service.change_password(
        db, current_user, payload.current_password, payload.new_password, settings
    )
    return {"message": "Password changed successfully"}
