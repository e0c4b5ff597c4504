"""
Follow graph mutations.

An edge is one row in the User.following join table; `followers` is the
reverse view of the same row. The toggle runs in one transaction with the
actor's row locked, so concurrent toggles by the same actor serialize and
the notification is written together with the edge.
"""
import logging

from django.db import transaction

from apps.core.errors import NotFoundError, ValidationError
from apps.notifications.models import NotificationType
from apps.notifications.services import notify
from .models import User

logger = logging.getLogger(__name__)


def is_following(actor: User, target: User) -> bool:
    return actor.following.filter(id=target.id).exists()


@transaction.atomic
def follow_unfollow(actor: User, target_id) -> bool:
    """
    Follow `target_id` if the actor does not follow them yet, else unfollow.

    Returns:
        True if the actor now follows the target, False if they unfollowed.

    Raises:
        ValidationError: actor and target are the same user
        NotFoundError: no such target
    """
    if str(actor.id) == str(target_id):
        raise ValidationError("You cannot follow yourself")

    target = User.objects.filter(id=target_id, is_active=True).first()
    if not target:
        raise NotFoundError("User not found")

    actor = User.objects.select_for_update().get(id=actor.id)

    if is_following(actor, target):
        actor.following.remove(target)
        logger.info(f"User {actor.id} unfollowed {target.id}")
        return False

    actor.following.add(target)
    notify(actor, target, NotificationType.FOLLOW)
    logger.info(f"User {actor.id} followed {target.id}")
    return True
