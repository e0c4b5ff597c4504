"""Services for Notifications app."""
import logging
from typing import List

from django.utils import timezone

from .models import Notification, NotificationType

logger = logging.getLogger(__name__)


def notify(sender, recipient, notification_type: str) -> Notification:
    """Record that `sender` followed `recipient` or liked their post."""
    if notification_type not in NotificationType.values:
        raise ValueError(f"Unknown notification type: {notification_type}")

    notification = Notification.objects.create(
        sender=sender,
        recipient=recipient,
        type=notification_type,
    )
    logger.info(f"Notification {notification_type} from {sender.id} to {recipient.id}")
    return notification


def list_notifications(user) -> List[Notification]:
    """
    Return the user's notifications, newest first, then mark them all read.

    The returned objects keep the read flag they had before this call so
    the client can still highlight what is new.
    """
    notifications = list(
        Notification.objects
        .filter(recipient=user)
        .select_related('sender')
        .order_by('-created_at')
    )
    if notifications:
        Notification.objects.filter(
            id__in=[n.id for n in notifications],
            read=False,
        ).update(read=True, updated_at=timezone.now())
    return notifications


def clear_notifications(user) -> int:
    """Delete every notification addressed to the user. Returns the count."""
    deleted, _ = Notification.objects.filter(recipient=user).delete()
    logger.info(f"Cleared {deleted} notifications for user {user.id}")
    return deleted
