"""
Services for Identity app.

Credentials, sessions and profiles. Every function takes plain values or a
User and either returns a User or raises an apps.core.errors exception.
"""
import logging
import re
from typing import List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction

from apps.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from apps.core.image_storage import delete_image, upload_image
from .jwt_auth import get_user_id_from_token
from .models import User

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def _min_password_length() -> int:
    return getattr(settings, 'PASSWORD_MIN_LENGTH', 3)


def validate_email(email: str) -> None:
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email")


def validate_password(password: str) -> None:
    min_length = _min_password_length()
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters long")


def validate_lengths(**values) -> None:
    """Reject values longer than their User column. Keys are User field names."""
    for field_name, value in values.items():
        max_length = User._meta.get_field(field_name).max_length
        if value and len(value) > max_length:
            label = field_name.replace('_', ' ').capitalize()
            raise ValidationError(f"{label} must be at most {max_length} characters")


def _username_taken(username: str, exclude_id=None) -> bool:
    users = User.objects.filter(username__iexact=username)
    if exclude_id:
        users = users.exclude(id=exclude_id)
    return users.exists()


def _email_taken(email: str, exclude_id=None) -> bool:
    users = User.objects.filter(email__iexact=email)
    if exclude_id:
        users = users.exclude(id=exclude_id)
    return users.exists()


def _raise_conflict(exc: IntegrityError, username: str, email: str, exclude_id=None) -> None:
    """Turn a unique-constraint failure into the matching ConflictError."""
    logger.warning(f"Unique constraint violated for {username} / {email}: {exc}")
    if _email_taken(email, exclude_id):
        raise ConflictError("Email already exists") from exc
    if _username_taken(username, exclude_id):
        raise ConflictError("Username already exists") from exc
    raise exc


# =============================================================================
# Credentials & session
# =============================================================================

def signup(username: str, full_name: str, email: str, password: str) -> User:
    """
    Register a new user.

    Raises:
        ValidationError: missing field, malformed email, short password
        ConflictError: email or username already registered
    """
    username = (username or "").strip()
    full_name = (full_name or "").strip()
    email = (email or "").strip().lower()

    if not username or not full_name or not email or not password:
        raise ValidationError("All fields are required")

    validate_lengths(username=username, full_name=full_name, email=email)
    validate_email(email)

    if _email_taken(email):
        raise ConflictError("Email already exists")

    if _username_taken(username):
        raise ConflictError("Username already exists")

    validate_password(password)

    # A concurrent signup can still win the race past the checks above
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                email=email,
                password=password,
                full_name=full_name,
            )
    except IntegrityError as exc:
        _raise_conflict(exc, username, email)

    logger.info(f"New user signed up: {user.username} ({user.id})")
    return user


def login(username: str, password: str) -> User:
    """
    Check a username/password pair.

    Raises:
        ValidationError: a field is missing
        NotFoundError: no active user with that username
        AuthError: the password does not match
    """
    if not username or not password:
        raise ValidationError("All fields are required")

    user = User.objects.filter(username=username, is_active=True).first()
    if not user:
        logger.warning(f"Login attempt for unknown user: {username}")
        raise NotFoundError("User does not exist")

    if not user.check_password(password):
        logger.warning(f"Failed login for user {user.id}")
        raise AuthError("Invalid password")

    return user


def authenticate(token: Optional[str]) -> User:
    """
    Resolve a session token to its user.

    Pure with respect to server state: the token alone decides the outcome.

    Raises:
        AuthError: no token, bad signature, expired, or unknown subject
    """
    if not token:
        raise AuthError("Unauthorized, no token")

    user_id = get_user_id_from_token(token)
    if not user_id:
        raise AuthError("Unauthorized, invalid token")

    user = User.objects.filter(id=user_id, is_active=True).first()
    if not user:
        raise AuthError("Unauthorized, user not found")
    return user


# =============================================================================
# Profiles
# =============================================================================

def get_profile(username: str) -> User:
    user = User.objects.filter(username=username, is_active=True).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def get_user(user_id) -> User:
    user = User.objects.filter(id=user_id, is_active=True).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def suggested_users(user: User, limit: int = 3) -> List[User]:
    """Random active users the given user does not follow yet."""
    return list(
        User.objects
        .filter(is_active=True)
        .exclude(id=user.id)
        .exclude(id__in=user.following.values('id'))
        .order_by('?')[:limit]
    )


def update_profile(user: User, data: dict) -> User:
    """
    Apply a partial profile update.

    Keys mirror the client form: username, fullName, email, currentPassword,
    newPassword, bio, link, profileImg, coverImg. None means "leave as is";
    an empty string clears bio and link.
    """
    username = (data.get('username') or "").strip()
    email = (data.get('email') or "").strip().lower()
    full_name = (data.get('fullName') or "").strip()
    validate_lengths(
        username=username,
        email=email,
        full_name=full_name,
        bio=data.get('bio'),
        link=data.get('link'),
    )

    current_password = data.get('currentPassword')
    new_password = data.get('newPassword')

    if bool(current_password) != bool(new_password):
        raise ValidationError("Both passwords are required")

    if current_password and new_password:
        if not user.check_password(current_password):
            raise AuthError("Invalid current password", status_code=400)
        validate_password(new_password)
        user.set_password(new_password)

    if username and username != user.username:
        if _username_taken(username, exclude_id=user.id):
            raise ConflictError("Username already exists")
        user.username = username

    if email and email != user.email:
        validate_email(email)
        if _email_taken(email, exclude_id=user.id):
            raise ConflictError("Email already exists")
        user.email = email

    if full_name:
        user.full_name = full_name

    if data.get('bio') is not None:
        user.bio = data['bio']
    if data.get('link') is not None:
        user.link = data['link']

    # A rejected image aborts the update before anything is saved
    old_images, new_images = [], []
    if data.get('profileImg'):
        new_images.append(upload_image(data['profileImg'], 'avatars'))
        old_images.append(user.profile_img)
        user.profile_img = new_images[-1]
    if data.get('coverImg'):
        new_images.append(upload_image(data['coverImg'], 'covers'))
        old_images.append(user.cover_img)
        user.cover_img = new_images[-1]

    try:
        with transaction.atomic():
            user.save()
    except IntegrityError as exc:
        for name in new_images:
            delete_image(name)
        _raise_conflict(exc, user.username, user.email, exclude_id=user.id)

    for name in old_images:
        delete_image(name)

    logger.info(f"Profile updated for user {user.id}")
    return user
