from __future__ import annotations

from sqlalchemy.orm import Session

from pixelforge import models
from pixelforge.core.logging import get_logger
from pixelforge.core.security import hash_password
from pixelforge.core.settings import Settings
from pixelforge.schemas import Role

logger = get_logger(__name__)


def ensure_default_admin(db: Session, settings: Settings) -> models.User | None:
    """
    Create the configured administrator if no user has that username yet.

    Nothing is created unless ADMIN_PASSWORD is set; there is no built-in
    fallback password.
    """
    if settings.admin_password is None:
        return None

    existing = (
        db.query(models.User).filter(models.User.username == settings.admin_username).first()
    )
    if existing:
        return existing

    admin = models.User(
        username=settings.admin_username,
        email=settings.admin_email.lower(),
        hashed_password=hash_password(
            settings.admin_password.get_secret_value(), rounds=settings.bcrypt_rounds
        ),
        role=Role.ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("default_admin_created", user_id=str(admin.id), username=admin.username)
    return admin
