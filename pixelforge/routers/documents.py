from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from pixelforge import models
from pixelforge.db import get_db
from pixelforge.routers.deps import get_accessible_document, get_storage, require_document_roles
from pixelforge.schemas import Role
from pixelforge.services import document_service
from pixelforge.services.storage import DocumentStorage

router = APIRouter(prefix="/api/documents", tags=["documents"])

document_managers = require_document_roles(Role.ADMIN, Role.PROJECT_LEAD)


@router.get("/{document_id}/download")
def download_document(
    document: models.Document = Depends(get_accessible_document),
    storage: DocumentStorage = Depends(get_storage),
) -> FileResponse:
    """Stream a stored file back under its original name."""
    path = document_service.file_path_for(storage, document)
    return FileResponse(path, media_type=document.mime_type, filename=document.original_name)


@router.delete("/{document_id}")
def delete_document(
    document: models.Document = Depends(document_managers),
    db: Session = Depends(get_db),
    storage: DocumentStorage = Depends(get_storage),
):
    document_service.delete_document(db, storage, document)
    return {"message": "Document deleted successfully"}
