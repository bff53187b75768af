from __future__ import annotations

import uuid
from typing import Optional, assert_never

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, joinedload, selectinload

from pixelforge import models
from pixelforge.core.exceptions import InvalidInput, ResourceNotFound, not_found
from pixelforge.core.logging import get_logger
from pixelforge.schemas import CurrentUser, ProjectCreate, ProjectStatus, Role

logger = get_logger(__name__)

ALREADY_ASSIGNED = "User is already assigned to this project"


def _project_query(db: Session) -> Query:
    return db.query(models.Project).options(
        joinedload(models.Project.created_by),
        selectinload(models.Project.memberships).joinedload(models.ProjectMember.user),
    )


def _scope_for(query: Query, user: CurrentUser) -> Query:
    """Restrict a project query to what the caller's role may list."""
    is_member = models.Project.memberships.any(models.ProjectMember.user_id == user.id)
    role = user.role
    if role is Role.ADMIN:
        return query
    elif role is Role.PROJECT_LEAD:
        return query.filter(or_(models.Project.created_by_user_id == user.id, is_member))
    elif role is Role.DEVELOPER:
        return query.filter(is_member)
    else:
        assert_never(role)


def list_projects_for(db: Session, user: CurrentUser) -> list[models.Project]:
    query = _scope_for(_project_query(db), user)
    return query.order_by(models.Project.created_at.desc()).all()


def parse_id(raw_id: str | uuid.UUID, resource_type: str) -> uuid.UUID:
    """Path ids are opaque; anything that isn't a UUID simply doesn't exist."""
    if isinstance(raw_id, uuid.UUID):
        return raw_id
    try:
        return uuid.UUID(str(raw_id))
    except (TypeError, ValueError):
        raise not_found(resource_type)


def get_project(db: Session, project_id: str | uuid.UUID) -> Optional[models.Project]:
    project_pk = parse_id(project_id, "Project")
    return _project_query(db).filter(models.Project.id == project_pk).first()


def get_project_or_404(db: Session, project_id: str | uuid.UUID) -> models.Project:
    project = get_project(db, project_id)
    if project is None:
        raise not_found("Project")
    return project


def create_project(db: Session, payload: ProjectCreate, creator: CurrentUser) -> models.Project:
    project = models.Project(
        name=payload.name,
        description=payload.description or None,
        deadline=payload.deadline,
        status=ProjectStatus.ACTIVE,
        created_by_user_id=creator.id,
    )
    db.add(project)
    db.commit()
    logger.info("project_created", project_id=str(project.id), created_by=str(creator.id))
    return get_project_or_404(db, project.id)


def update_status(
    db: Session, project_id: str | uuid.UUID, new_status: ProjectStatus
) -> models.Project:
    project = get_project_or_404(db, project_id)
    project.status = new_status
    db.add(project)
    db.commit()
    logger.info("project_status_updated", project_id=str(project.id), status=new_status.value)
    return get_project_or_404(db, project.id)


def assign_member(db: Session, project: models.Project, user_id: uuid.UUID) -> models.Project:
    user = db.get(models.User, user_id)
    if user is None:
        raise not_found("User")
    if project.has_member(user.id):
        raise InvalidInput(ALREADY_ASSIGNED)

    db.add(models.ProjectMember(project_id=project.id, user_id=user.id))
    try:
        db.commit()
    except IntegrityError:
        # Concurrent assignment of the same user won the race
        db.rollback()
        raise InvalidInput(ALREADY_ASSIGNED)
    logger.info("member_assigned", project_id=str(project.id), user_id=str(user.id))
    return get_project_or_404(db, project.id)


def remove_member(db: Session, project: models.Project, user_id: str | uuid.UUID) -> None:
    user_pk = parse_id(user_id, "User")
    membership = db.get(models.ProjectMember, (project.id, user_pk))
    if membership is None:
        raise ResourceNotFound("User is not assigned to this project")
    db.delete(membership)
    db.commit()
    logger.info("member_removed", project_id=str(project.id), user_id=str(user_pk))
