from typing import List
from uuid import UUID

from django.http import HttpRequest
from ninja import Router

from apps.identity.dtos import MessageOut
from apps.identity.security import require_auth
from .dtos import CommentIn, PostIn, PostOut
from . import services

router = Router(tags=["Posts"])


# =============================================================================
# Feeds
# =============================================================================

@router.get("/all", response=List[PostOut], by_alias=True)
def get_all_posts(request: HttpRequest):
    require_auth(request)
    return services.all_posts()


@router.get("/following", response=List[PostOut], by_alias=True)
def get_following_posts(request: HttpRequest):
    """Posts by the users the current user follows."""
    user = require_auth(request)
    return services.following_posts(user)


@router.get("/user/{username}", response=List[PostOut], by_alias=True)
def get_user_posts(request: HttpRequest, username: str):
    require_auth(request)
    return services.user_posts(username)


@router.get("/likes/{user_id}", response=List[PostOut], by_alias=True)
def get_liked_posts(request: HttpRequest, user_id: UUID):
    """Posts liked by the given user."""
    require_auth(request)
    return services.liked_posts(user_id)


# =============================================================================
# Mutations
# =============================================================================

@router.post("/create", response={201: PostOut}, by_alias=True)
def create_post(request: HttpRequest, payload: PostIn):
    user = require_auth(request)
    return 201, services.create_post(user, text=payload.text, img=payload.img)


@router.post("/like/{post_id}", response=List[UUID])
def like_unlike_post(request: HttpRequest, post_id: UUID):
    """Toggle the current user's like. Returns the post's liker ids."""
    user = require_auth(request)
    return services.like_unlike(user, post_id)


@router.post("/comment/{post_id}", response={201: PostOut}, by_alias=True)
def comment_on_post(request: HttpRequest, post_id: UUID, payload: CommentIn):
    user = require_auth(request)
    return 201, services.comment_on_post(post_id, user, payload.text)


# Registered last: "/{post_id}" would otherwise shadow the literal paths above
@router.delete("/{post_id}", response=MessageOut)
def delete_post(request: HttpRequest, post_id: UUID):
    """Delete one of the current user's posts."""
    user = require_auth(request)
    services.delete_post(post_id, user)
    return {"message": "Post deleted successfully"}
