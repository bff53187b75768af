from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from pixelforge import models
from pixelforge.core.exceptions import InvalidInput
from pixelforge.db import get_db
from pixelforge.routers.deps import (
    get_accessible_project,
    get_current_user,
    get_storage,
    require_project_roles,
    require_roles,
)
from pixelforge.schemas import (
    AssignmentCreate,
    CurrentUser,
    DocumentRead,
    MemberRead,
    ProjectCreate,
    ProjectRead,
    ProjectStatusUpdate,
    Role,
)
from pixelforge.services import document_service, project_service
from pixelforge.services.storage import DocumentStorage

router = APIRouter(prefix="/api/projects", tags=["projects"])

admin_only = require_roles(Role.ADMIN)
project_managers = require_project_roles(Role.ADMIN, Role.PROJECT_LEAD)


def _read(project: models.Project) -> ProjectRead:
    return ProjectRead.model_validate(project, from_attributes=True)


@router.get("", response_model=list[ProjectRead])
def list_projects(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> list[ProjectRead]:
    """
    List the projects visible to the caller.

    - **admin**: every project
    - **project_lead**: projects they created or are a member of
    - **developer**: projects they are a member of
    """
    return [_read(p) for p in project_service.list_projects_for(db, current_user)]


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(admin_only),
) -> ProjectRead:
    return _read(project_service.create_project(db, payload, current_user))


@router.put("/{project_id}/status", response_model=ProjectRead)
def update_project_status(
    project_id: str,
    payload: ProjectStatusUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(admin_only),
) -> ProjectRead:
    return _read(project_service.update_status(db, project_id, payload.status))


@router.get("/{project_id}", response_model=ProjectRead)
def get_project_detail(project: models.Project = Depends(get_accessible_project)) -> ProjectRead:
    return _read(project)


# --- assignments -----------------------------------------------------------


@router.get("/{project_id}/assignments", response_model=list[MemberRead])
def list_assignments(
    project: models.Project = Depends(get_accessible_project),
) -> list[MemberRead]:
    return [MemberRead.model_validate(u, from_attributes=True) for u in project.members]


@router.post(
    "/{project_id}/assignments", response_model=ProjectRead, status_code=status.HTTP_201_CREATED
)
def assign_user(
    payload: AssignmentCreate,
    project: models.Project = Depends(project_managers),
    db: Session = Depends(get_db),
) -> ProjectRead:
    return _read(project_service.assign_member(db, project, payload.user_id))


@router.delete("/{project_id}/assignments/{user_id}")
def remove_user(
    user_id: str,
    project: models.Project = Depends(project_managers),
    db: Session = Depends(get_db),
):
    project_service.remove_member(db, project, user_id)
    return {"message": "User removed from project successfully"}


# --- documents -------------------------------------------------------------


@router.get("/{project_id}/documents", response_model=list[DocumentRead])
def list_documents(
    project: models.Project = Depends(get_accessible_project),
    db: Session = Depends(get_db),
) -> list[DocumentRead]:
    return [
        DocumentRead.model_validate(d, from_attributes=True)
        for d in document_service.list_documents(db, project)
    ]


@router.post(
    "/{project_id}/documents", response_model=DocumentRead, status_code=status.HTTP_201_CREATED
)
def upload_document(
    file: UploadFile | None = File(None),
    project: models.Project = Depends(project_managers),
    db: Session = Depends(get_db),
    storage: DocumentStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
) -> DocumentRead:
    """Upload one file (multipart field ``file``) to the project."""
    if file is None or not file.filename:
        raise InvalidInput("No file uploaded")
    document = document_service.upload_document(
        db,
        storage,
        project,
        file.file,
        file.filename,
        file.content_type,
        current_user,
    )
    return DocumentRead.model_validate(document, from_attributes=True)
