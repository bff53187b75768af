"""
Access decisions behind the request gates.

These are pure functions of the caller's identity and the target project so
they can be checked without a request or a database.
"""

from __future__ import annotations

from typing import Iterable

from pixelforge import models
from pixelforge.schemas import CurrentUser, Role


def has_role(user: CurrentUser, allowed: Iterable[Role]) -> bool:
    return user.role in set(allowed)


def is_project_creator(user: CurrentUser, project: models.Project) -> bool:
    return project.created_by_user_id == user.id


def can_access_project(user: CurrentUser, project: models.Project) -> bool:
    """Admins see every project; anyone else must have created it or be a member."""
    if user.role is Role.ADMIN:
        return True
    return is_project_creator(user, project) or project.has_member(user.id)
