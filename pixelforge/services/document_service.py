from __future__ import annotations

import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from sqlalchemy.orm import Session, joinedload

from pixelforge import models
from pixelforge.core.exceptions import not_found
from pixelforge.core.logging import get_logger
from pixelforge.schemas import CurrentUser
from pixelforge.services.project_service import parse_id
from pixelforge.services.storage import DocumentStorage, check_file_type

logger = get_logger(__name__)


def list_documents(db: Session, project: models.Project) -> list[models.Document]:
    return (
        db.query(models.Document)
        .options(joinedload(models.Document.uploaded_by))
        .filter(models.Document.project_id == project.id)
        .order_by(models.Document.created_at.desc())
        .all()
    )


def get_document(db: Session, document_id: str | uuid.UUID) -> Optional[models.Document]:
    document_pk = parse_id(document_id, "Document")
    return (
        db.query(models.Document)
        .options(joinedload(models.Document.uploaded_by))
        .filter(models.Document.id == document_pk)
        .first()
    )


def get_document_or_404(db: Session, document_id: str | uuid.UUID) -> models.Document:
    document = get_document(db, document_id)
    if document is None:
        raise not_found("Document")
    return document


def upload_document(
    db: Session,
    storage: DocumentStorage,
    project: models.Project,
    source: BinaryIO,
    original_name: str,
    content_type: str | None,
    uploader: CurrentUser,
) -> models.Document:
    """
    Validate, store and record one uploaded file.

    Type and size are checked before anything is written to the database, so a
    rejected upload never leaves a metadata row behind.
    """
    mime_type = check_file_type(original_name, content_type)
    stored = storage.save(source, original_name)

    document = models.Document(
        project_id=project.id,
        filename=stored.filename,
        original_name=original_name,
        file_path=str(stored.path),
        file_size=stored.size,
        mime_type=mime_type,
        uploaded_by_user_id=uploader.id,
    )
    db.add(document)
    try:
        db.commit()
    except Exception:
        db.rollback()
        storage.delete(str(stored.path))
        raise
    logger.info(
        "document_uploaded",
        document_id=str(document.id),
        project_id=str(project.id),
        size=stored.size,
    )
    return get_document_or_404(db, document.id)


def file_path_for(storage: DocumentStorage, document: models.Document) -> Path:
    path = storage.resolve(document.file_path)
    if not path.is_file():
        logger.warning("document_file_missing", document_id=str(document.id), path=str(path))
        raise not_found("File")
    return path


def delete_document(db: Session, storage: DocumentStorage, document: models.Document) -> None:
    storage.delete(document.file_path)
    document_id = str(document.id)
    db.delete(document)
    db.commit()
    logger.info("document_deleted", document_id=document_id)
