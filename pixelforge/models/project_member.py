from sqlalchemy import Column, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from pixelforge.db import Base
from pixelforge.models.project import Project
from pixelforge.models.user import User


class ProjectMember(Base):
    """Membership row; the composite key makes a project's member list a set."""

    __tablename__ = "project_member"

    project_id = Column(Uuid(as_uuid=True), ForeignKey("project.id"), primary_key=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), primary_key=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    project = relationship(Project, back_populates="memberships")
    user = relationship(User, backref="project_memberships")
