import uuid

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import relationship

from pixelforge.db import Base
from pixelforge.models.user import User
from pixelforge.schemas.enums import ProjectStatus


class Project(Base):
    __tablename__ = "project"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    deadline = Column(Date, nullable=True)
    status = Column(
        Enum(
            ProjectStatus,
            name="project_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ProjectStatus.ACTIVE,
    )
    created_by_user_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    created_by = relationship(User, backref="created_projects")
    memberships = relationship(
        "ProjectMember",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectMember.added_at",
    )
    documents = relationship("Document", back_populates="project")

    @property
    def members(self) -> list[User]:
        return [m.user for m in self.memberships]

    @property
    def team_size(self) -> int:
        return len(self.memberships)

    def has_member(self, user_id: uuid.UUID) -> bool:
        return any(m.user_id == user_id for m in self.memberships)
