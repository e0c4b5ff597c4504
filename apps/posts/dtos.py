"""DTOs for Posts app."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ninja import Field, Schema

from apps.core.image_storage import image_url
from apps.identity.dtos import AuthorOut


class CommentOut(Schema):
    id: UUID = Field(..., serialization_alias='_id')
    text: str
    user: AuthorOut
    createdAt: datetime = Field(..., validation_alias='created_at')


class PostOut(Schema):
    id: UUID = Field(..., serialization_alias='_id')
    user: AuthorOut
    text: str
    img: str
    likes: List[UUID]
    comments: List[CommentOut]
    createdAt: datetime = Field(..., validation_alias='created_at')
    updatedAt: datetime = Field(..., validation_alias='updated_at')

    @staticmethod
    def resolve_img(obj):
        return image_url(obj.img)

    @staticmethod
    def resolve_likes(obj):
        return [like.user_id for like in obj.like_records.all()]


class PostIn(Schema):
    text: Optional[str] = None
    img: Optional[str] = None


class CommentIn(Schema):
    text: str = ""
