import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from pixelforge.schemas.enums import ProjectStatus
from pixelforge.schemas.user import MemberRead, UserRef


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    deadline: Optional[date] = None

    model_config = {"str_strip_whitespace": True}


class ProjectStatusUpdate(BaseModel):
    status: ProjectStatus


class ProjectRead(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    deadline: Optional[date] = None
    status: ProjectStatus
    created_by: UserRef
    members: List[MemberRead] = []
    team_size: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AssignmentCreate(BaseModel):
    user_id: uuid.UUID
