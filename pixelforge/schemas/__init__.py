from .document import DocumentRead
from .enums import ProjectStatus, Role
from .project import AssignmentCreate, ProjectCreate, ProjectRead, ProjectStatusUpdate
from .user import (
    ChangePasswordRequest,
    CurrentUser,
    LoginResponse,
    MemberRead,
    Token,
    UserCreate,
    UserLogin,
    UserRead,
    UserRef,
)

__all__ = [
    "Role",
    "ProjectStatus",
    "UserRef",
    "UserCreate",
    "UserRead",
    "MemberRead",
    "CurrentUser",
    "UserLogin",
    "Token",
    "LoginResponse",
    "ChangePasswordRequest",
    "ProjectCreate",
    "ProjectStatusUpdate",
    "ProjectRead",
    "AssignmentCreate",
    "DocumentRead",
]
