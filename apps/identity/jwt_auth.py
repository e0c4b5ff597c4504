"""
JWT session tokens for Flock.

A session is a signed, stateless token stored in an httpOnly cookie. Nothing
is kept server-side: verifying a token is a pure function of the token, the
signing secret and the clock.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt
from django.conf import settings

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_ALGORITHM = 'HS256'
SESSION_COOKIE_NAME = 'jwt'
TOKEN_TYPE = 'session'


def _secret() -> str:
    return getattr(settings, 'JWT_SECRET', settings.SECRET_KEY)


def _expire_days() -> int:
    return getattr(settings, 'SESSION_TOKEN_EXPIRE_DAYS', 15)


def create_session_token(user_id: UUID) -> str:
    """
    Create a session token for a user.

    Contains only the user id. Expires after SESSION_TOKEN_EXPIRE_DAYS
    (15 days by default).
    """
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user_id),
        'exp': now + timedelta(days=_expire_days()),
        'iat': now,
        'type': TOKEN_TYPE,
    }
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT token.

    Returns:
        Decoded payload if valid, None if invalid/expired.
    """
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired session token")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected invalid session token: {e}")
        return None


def get_user_id_from_token(token: str) -> Optional[UUID]:
    """
    Extract user_id from a valid session token.

    Returns:
        UUID of user if token valid, None otherwise.
    """
    payload = decode_token(token)
    if not payload or payload.get('type') != TOKEN_TYPE or 'sub' not in payload:
        return None
    try:
        return UUID(payload['sub'])
    except (TypeError, ValueError):
        return None


# Cookie configuration
def get_session_cookie_settings(is_production: bool = False) -> dict:
    """
    Cookie settings for the session token.

    Production: Secure, SameSite=Strict
    Development: Not secure (localhost), SameSite=Strict
    """
    return {
        'httponly': True,
        'secure': is_production,
        'samesite': 'Strict',
        'path': '/',
        'max_age': _expire_days() * 24 * 60 * 60,
    }
