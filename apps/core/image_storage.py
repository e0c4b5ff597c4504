"""
Image storage for avatars, cover images and post images.

The browser sends images as base64 data URIs. They are decoded, validated
and saved through Django's default storage, which is S3 (django-storages)
when USE_S3_STORAGE is on and the local media directory otherwise. Models
keep the storage name; image_url() turns it into a public URL.
"""
import base64
import binascii
import logging
import re
import uuid
from typing import Optional

from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from config.storage import is_s3_enabled
from .errors import ValidationError

logger = logging.getLogger(__name__)

# Allowed image types
ALLOWED_MIME_TYPES = {
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
}

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB

DATA_URI_RE = re.compile(r'^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$', re.DOTALL)


def decode_data_uri(data_uri: str) -> tuple[str, bytes]:
    """
    Split a base64 data URI into (mime_type, raw bytes).

    Raises:
        ValidationError: if the URI is malformed, not an allowed image
            type, or too large.
    """
    match = DATA_URI_RE.match(data_uri.strip())
    if not match:
        raise ValidationError("Invalid image data")

    mime_type = match.group('mime').lower()
    if mime_type not in ALLOWED_MIME_TYPES:
        raise ValidationError(f"Invalid image type: {mime_type}. Allowed: JPEG, PNG, GIF, WEBP")

    try:
        content = base64.b64decode(match.group('data'), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Invalid image data")

    if len(content) > MAX_FILE_SIZE:
        raise ValidationError(f"Image too large. Maximum size is {MAX_FILE_SIZE // (1024*1024)} MB")

    return mime_type, content


def upload_image(data_uri: str, folder: str) -> str:
    """
    Store an image and return its storage name.

    Args:
        data_uri: "data:image/png;base64,..." as produced by FileReader
        folder: Top-level folder, e.g. "posts" or "avatars"
    """
    mime_type, content = decode_data_uri(data_uri)
    path = f"{folder}/{uuid.uuid4().hex}{ALLOWED_MIME_TYPES[mime_type]}"

    saved_path = default_storage.save(path, ContentFile(content))
    logger.info(f"Stored image {saved_path} ({len(content)} bytes, s3={is_s3_enabled()})")
    return saved_path


def delete_image(name: Optional[str]) -> None:
    """Remove a stored image. Missing names are ignored."""
    if not name:
        return
    try:
        default_storage.delete(name)
    except Exception as e:
        logger.error(f"Failed to delete image {name}: {e}")


def image_url(name: Optional[str]) -> str:
    """Public URL for a stored image, or "" when there is none."""
    if not name:
        return ""
    return default_storage.url(name)
