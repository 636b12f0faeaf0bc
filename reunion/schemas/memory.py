from datetime import datetime
from .base import BaseSchema

class MemoryResponse(BaseSchema):
    id: str
    image_title: str
    image_description: str | None = None
    image_date: datetime | None = None
    upload_photo_url: str | None = None
    upload_video_url: str | None = None
    uploaded_by: str | None = None
    created_at: datetime

class MemoryListResponse(BaseSchema):
    memories: list[MemoryResponse]

class MemoryCreated(BaseSchema):
    success: bool = True
    message: str
    id: str
