import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    Account and public profile.

    The follow graph is a single self-referential many-to-many table:
    `user.following` and `user.followers` read the same edge rows, so the
    two sides can never disagree.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    full_name = models.CharField(max_length=150)
    email = models.EmailField(unique=True)

    bio = models.CharField(max_length=280, blank=True)
    link = models.CharField(max_length=255, blank=True)
    # Storage names, see apps.core.image_storage
    profile_img = models.CharField(max_length=255, blank=True)
    cover_img = models.CharField(max_length=255, blank=True)

    following = models.ManyToManyField(
        'self',
        symmetrical=False,
        related_name='followers',
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['username']

    def __str__(self):
        return self.username
