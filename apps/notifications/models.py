import uuid
from django.conf import settings
from django.db import models


class NotificationType(models.TextChoices):
    LIKE = 'like', 'Like'
    FOLLOW = 'follow', 'Follow'


class Notification(models.Model):
    """
    Tells a user that someone followed them or liked one of their posts.
    Created as a side effect of follow/like; marked read when listed.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_notifications',
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    type = models.CharField(max_length=10, choices=NotificationType.choices)
    read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', '-created_at'], name='notif_recipient_created_idx'),
        ]

    def __str__(self):
        return f"{self.type} from {self.sender_id} to {self.recipient_id}"
