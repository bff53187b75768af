from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pixelforge.core.settings import Settings
from pixelforge.db import get_db
from pixelforge.routers.deps import get_app_settings, require_roles
from pixelforge.schemas import CurrentUser, MemberRead, Role, UserCreate, UserRead
from pixelforge.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])

admin_only = require_roles(Role.ADMIN)
team_managers = require_roles(Role.ADMIN, Role.PROJECT_LEAD)


@router.get("", response_model=list[UserRead])
def list_users(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(admin_only),
) -> list[UserRead]:
    return [UserRead.model_validate(u, from_attributes=True) for u in user_service.list_users(db)]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: CurrentUser = Depends(admin_only),
) -> UserRead:
    user = user_service.create_user(db, payload, settings)
    return UserRead.model_validate(user, from_attributes=True)


@router.get("/available", response_model=list[MemberRead])
def list_available_users(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(team_managers),
) -> list[MemberRead]:
    """Developers that can be assigned to projects, sorted by username."""
    return [
        MemberRead.model_validate(u, from_attributes=True)
        for u in user_service.list_available_users(db)
    ]
