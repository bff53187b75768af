import uuid
from datetime import datetime

from pydantic import BaseModel, computed_field

from pixelforge.schemas.user import UserRef


class DocumentRead(BaseModel):
    id: uuid.UUID
    project_id: uuid.UUID
    filename: str
    original_name: str
    file_size: int
    mime_type: str
    uploaded_by: UserRef
    created_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def download_url(self) -> str:
        return f"/api/documents/{self.id}/download"
