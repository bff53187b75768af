# Enums for PixelForge Nexus
from enum import Enum


class Role(str, Enum):
    """Global role of a user; every gated route is allowed for a subset of these."""

    ADMIN = "admin"
    PROJECT_LEAD = "project_lead"
    DEVELOPER = "developer"


class ProjectStatus(str, Enum):
    """Status of project"""

    ACTIVE = "active"
    COMPLETED = "completed"


__all__ = [
    "Role",
    "ProjectStatus",
]
