from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pixelforge import models
from pixelforge.core.exceptions import AuthenticationFailed, Conflict, InvalidInput
from pixelforge.core.logging import get_logger
from pixelforge.core.security import (
    burn_password_check,
    create_access_token,
    hash_password,
    verify_password,
)
from pixelforge.core.settings import Settings
from pixelforge.schemas import CurrentUser, Role, UserCreate

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def list_users(db: Session) -> list[models.User]:
    return db.query(models.User).order_by(models.User.created_at.desc()).all()


def list_available_users(db: Session) -> list[models.User]:
    """Users that can be put on a project team."""
    return (
        db.query(models.User)
        .filter(models.User.role == Role.DEVELOPER)
        .order_by(models.User.username.asc())
        .all()
    )


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.get(models.User, user_id)


def create_user(db: Session, payload: UserCreate, settings: Settings) -> models.User:
    user = models.User(
        username=payload.username,
        email=str(payload.email).lower(),
        hashed_password=hash_password(payload.password, rounds=settings.bcrypt_rounds),
        role=payload.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("user_create_conflict", username=payload.username)
        raise Conflict("Username or email already exists")
    db.refresh(user)
    logger.info("user_created", user_id=str(user.id), role=user.role.value)
    return user


def authenticate(db: Session, username: str, password: str, settings: Settings) -> models.User:
    """
    Check a username/password pair.

    Unknown usernames and wrong passwords fail with the same error so callers
    cannot tell which one it was.
    """
    user = db.query(models.User).filter(models.User.username == username).first()
    if user is None:
        burn_password_check(password, rounds=settings.bcrypt_rounds)
        logger.info("login_failed")
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    if not verify_password(password, user.hashed_password):
        logger.info("login_failed")
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    logger.info("login_succeeded", user_id=str(user.id))
    return user


def issue_token(user: models.User, settings: Settings) -> str:
    return create_access_token(
        {"sub": str(user.id), "username": user.username, "role": user.role.value},
        settings,
    )


def change_password(
    db: Session,
    current_user: CurrentUser,
    current_password: str,
    new_password: str,
    settings: Settings,
) -> None:
    user = get_user(db, current_user.id)
    if user is None:
        # Token outlived its account
        raise AuthenticationFailed("Invalid or expired token")
    if not verify_password(current_password, user.hashed_password):
        raise InvalidInput("Current password is incorrect")
    user.hashed_password = hash_password(new_password, rounds=settings.bcrypt_rounds)
    db.add(user)
    db.commit()
    logger.info("password_changed", user_id=str(user.id))
