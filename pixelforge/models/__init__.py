from .document import Document
from .project import Project
from .project_member import ProjectMember
from .user import User

__all__ = [
    "User",
    "Project",
    "ProjectMember",
    "Document",
]
