# plainpost/schemas/post_schema.py
from pydantic import BaseModel, ConfigDict
from typing import Dict, Optional
import uuid
from datetime import datetime

from plainpost.models.post import PostStatus

# emptiness of title/content is checked by PostService, not here


class PostCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    content: str
    status: PostStatus
    created_at: datetime
    updated_at: datetime


class ValidationErrorRead(BaseModel):
    detail: str
    errors: Dict[str, str]
