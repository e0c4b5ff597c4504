"""
Services for Posts app.

Post creation/deletion, comments, the like/unlike toggle, and the feed
queries behind the timeline tabs.
"""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch, QuerySet

from apps.core.errors import ForbiddenError, NotFoundError, ValidationError
from apps.core.image_storage import delete_image, upload_image
from apps.identity.models import User
from apps.identity.services import get_profile, get_user
from apps.notifications.models import NotificationType
from apps.notifications.services import notify
from .models import Comment, Like, Post

logger = logging.getLogger(__name__)


def _feed_queryset() -> QuerySet:
    """Posts newest first with author, likes and comment authors loaded."""
    return (
        Post.objects
        .select_related('user')
        .prefetch_related(
            Prefetch('like_records', queryset=Like.objects.order_by('id')),
            'comments__user',
        )
        .order_by('-created_at')
    )


def get_post(post_id) -> Post:
    post = _feed_queryset().filter(id=post_id).first()
    if not post:
        raise NotFoundError("Post not found")
    return post


# =============================================================================
# Mutations
# =============================================================================

def create_post(author: User, text: Optional[str] = None, img: Optional[str] = None) -> Post:
    """
    Create a post. At least one of text and img is required.

    `img` is a base64 data URI; it is stored and the post keeps its
    storage name.
    """
    text = (text or "").strip()
    if not text and not img:
        raise ValidationError("Text or image is required")

    img_name = upload_image(img, 'posts') if img else ""

    post = Post.objects.create(user=author, text=text, img=img_name)
    logger.info(f"User {author.id} created post {post.id}")
    return get_post(post.id)


def delete_post(post_id, requester: User) -> None:
    """
    Delete a post and its stored image.

    Raises:
        NotFoundError: no such post
        ForbiddenError: requester is not the author
    """
    post = Post.objects.filter(id=post_id).first()
    if not post:
        raise NotFoundError("Post not found")

    if post.user_id != requester.id:
        logger.warning(f"User {requester.id} tried to delete post {post.id} owned by {post.user_id}")
        raise ForbiddenError("You can only delete your own posts")

    img_name = post.img
    post.delete()
    delete_image(img_name)
    logger.info(f"User {requester.id} deleted post {post_id}")


def comment_on_post(post_id, user: User, text: str) -> Post:
    if not Post.objects.filter(id=post_id).exists():
        raise NotFoundError("Post not found")

    text = (text or "").strip()
    if not text:
        raise ValidationError("Text is required")

    Comment.objects.create(post_id=post_id, user=user, text=text)
    return get_post(post_id)


def liker_ids(post: Post) -> List[UUID]:
    """Ids of the users who liked the post, in the order they liked it."""
    return list(
        Like.objects
        .filter(post_id=post.id)
        .order_by('id')
        .values_list('user_id', flat=True)
    )


@transaction.atomic
def like_unlike(user: User, post_id) -> List[UUID]:
    """
    Like the post if the user has not liked it yet, else remove the like.

    A `like` notification goes to the author only when a like is added.
    The post row is locked for the duration so concurrent toggles on the
    same post serialize.

    Returns:
        The post's liker ids after the toggle.
    """
    post = Post.objects.select_for_update().filter(id=post_id).first()
    if not post:
        raise NotFoundError("Post not found")

    if post.likes.filter(id=user.id).exists():
        post.likes.remove(user)
        logger.info(f"User {user.id} unliked post {post.id}")
    else:
        post.likes.add(user)
        notify(user, post.user, NotificationType.LIKE)
        logger.info(f"User {user.id} liked post {post.id}")

    return liker_ids(post)


# =============================================================================
# Feeds
# =============================================================================

def all_posts() -> List[Post]:
    return list(_feed_queryset())


def following_posts(user: User) -> List[Post]:
    """Posts by the users the given user follows."""
    return list(_feed_queryset().filter(user__in=user.following.all()))


def user_posts(username: str) -> List[Post]:
    author = get_profile(username)
    return list(_feed_queryset().filter(user=author))


def liked_posts(user_id) -> List[Post]:
    """Posts liked by the given user."""
    user = get_user(user_id)
    return list(_feed_queryset().filter(likes=user))
