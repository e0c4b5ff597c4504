"""
DTOs for Identity app.

Response schemas emit the browser client's JSON shape: camelCase keys and
the primary key as `_id`. Routes that return them must pass by_alias=True.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ninja import Field, Schema

from apps.core.image_storage import image_url


class MessageOut(Schema):
    message: str


class AuthorOut(Schema):
    """Compact user embedded in posts, comments and notifications."""
    id: UUID = Field(..., serialization_alias='_id')
    username: str
    fullName: str = Field(..., validation_alias='full_name')
    profileImg: str

    @staticmethod
    def resolve_profileImg(obj):
        return image_url(obj.profile_img)


class UserOut(Schema):
    id: UUID = Field(..., serialization_alias='_id')
    username: str
    fullName: str = Field(..., validation_alias='full_name')
    email: str
    bio: str
    link: str
    profileImg: str
    coverImg: str
    followers: List[UUID]
    following: List[UUID]
    likedPosts: List[UUID]
    createdAt: datetime = Field(..., validation_alias='created_at')
    updatedAt: datetime = Field(..., validation_alias='updated_at')

    @staticmethod
    def resolve_profileImg(obj):
        return image_url(obj.profile_img)

    @staticmethod
    def resolve_coverImg(obj):
        return image_url(obj.cover_img)

    @staticmethod
    def resolve_followers(obj):
        return list(obj.followers.values_list('id', flat=True))

    @staticmethod
    def resolve_following(obj):
        return list(obj.following.values_list('id', flat=True))

    @staticmethod
    def resolve_likedPosts(obj):
        return list(obj.liked_posts.values_list('id', flat=True))


class SignupIn(Schema):
    # Missing fields are reported by services.signup
    username: str = ""
    fullName: str = ""
    email: str = ""
    password: str = ""


class LoginIn(Schema):
    username: str = ""
    password: str = ""


class ProfileUpdateIn(Schema):
    username: Optional[str] = None
    fullName: Optional[str] = None
    email: Optional[str] = None
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None
    bio: Optional[str] = None
    link: Optional[str] = None
    profileImg: Optional[str] = None
    coverImg: Optional[str] = None
