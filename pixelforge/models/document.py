import uuid

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import relationship

from pixelforge.db import Base
from pixelforge.models.project import Project
from pixelforge.models.user import User


class Document(Base):
    __tablename__ = "document"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid(as_uuid=True), ForeignKey("project.id"), nullable=False, index=True)
    filename = Column(String(400), nullable=False, unique=True)
    original_name = Column(String(255), nullable=False)
    file_path = Column(String(1024), nullable=False)
    file_size = Column(BigInteger, nullable=False)
    mime_type = Column(String(255), nullable=False)
    uploaded_by_user_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    project = relationship(Project, back_populates="documents")
    uploaded_by = relationship(User)
