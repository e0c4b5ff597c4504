"""DTOs for Notifications app."""
from datetime import datetime
from uuid import UUID

from ninja import Field, Schema

from apps.identity.dtos import AuthorOut


class NotificationOut(Schema):
    id: UUID = Field(..., serialization_alias='_id')
    from_: AuthorOut = Field(..., validation_alias='sender', serialization_alias='from')
    to: UUID = Field(..., validation_alias='recipient_id')
    type: str
    read: bool
    createdAt: datetime = Field(..., validation_alias='created_at')
    updatedAt: datetime = Field(..., validation_alias='updated_at')
