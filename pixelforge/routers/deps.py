"""
Request gates shared by the routers.

Every protected route depends on :func:`get_current_user`; role and project
gates build on top of it.
"""

from typing import Callable

import jwt
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session

from pixelforge import models
from pixelforge.core.exceptions import AuthenticationFailed, PermissionDenied
from pixelforge.core.security import decode_access_token
from pixelforge.core.settings import Settings
from pixelforge.db import get_db
from pixelforge.schemas import CurrentUser, Role
from pixelforge.services import access
from pixelforge.services.document_service import get_document_or_404
from pixelforge.services.project_service import get_project_or_404
from pixelforge.services.storage import DocumentStorage

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)

AUTH_REQUIRED = "Authentication required"
INVALID_TOKEN = "Invalid or expired token"
INSUFFICIENT_PERMISSIONS = "Insufficient permissions"
PROJECT_ACCESS_DENIED = "Access denied to this project"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> DocumentStorage:
    return request.app.state.storage


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings),
) -> CurrentUser:
    if not token:
        raise AuthenticationFailed(AUTH_REQUIRED)
    try:
        payload = decode_access_token(token, settings)
        return CurrentUser(id=payload["sub"], username=payload["username"], role=payload["role"])
    except (jwt.PyJWTError, KeyError, ValidationError):
        raise AuthenticationFailed(INVALID_TOKEN)


def require_roles(*roles: Role) -> Callable[..., CurrentUser]:
    allowed = frozenset(roles)

    def _dep(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not access.has_role(current_user, allowed):
            raise PermissionDenied(INSUFFICIENT_PERMISSIONS)
        return current_user

    return _dep


def check_project_access(current_user: CurrentUser, project: models.Project) -> models.Project:
    if not access.can_access_project(current_user, project):
        raise PermissionDenied(PROJECT_ACCESS_DENIED)
    return project


def get_accessible_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> models.Project:
    """Project-access gate: admin, creator or member of ``project_id``."""
    return check_project_access(current_user, get_project_or_404(db, project_id))


def require_project_roles(*roles: Role) -> Callable[..., models.Project]:
    """Role gate followed by the project-access gate on ``project_id``."""
    role_gate = require_roles(*roles)

    def _dep(
        project_id: str,
        db: Session = Depends(get_db),
        current_user: CurrentUser = Depends(role_gate),
    ) -> models.Project:
        return check_project_access(current_user, get_project_or_404(db, project_id))

    return _dep


def get_accessible_document(
    document_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> models.Document:
    document = get_document_or_404(db, document_id)
    check_project_access(current_user, get_project_or_404(db, document.project_id))
    return document


def require_document_roles(*roles: Role) -> Callable[..., models.Document]:
    role_gate = require_roles(*roles)

    def _dep(
        document_id: str,
        db: Session = Depends(get_db),
        current_user: CurrentUser = Depends(role_gate),
    ) -> models.Document:
        document = get_document_or_404(db, document_id)
        check_project_access(current_user, get_project_or_404(db, document.project_id))
        return document

    return _dep
