"""
Request authentication helpers shared by every API router.

The session token travels in the `jwt` httpOnly cookie. Routes declare
auth=None and call require_auth() themselves.
"""
from django.http import HttpRequest, HttpResponse

from .jwt_auth import SESSION_COOKIE_NAME, create_session_token, get_session_cookie_settings
from .models import User
from . import services


def is_production() -> bool:
    """Check if running in production (Lambda or DEBUG=False)."""
    import os
    from django.conf import settings
    return bool(os.getenv('AWS_LAMBDA_FUNCTION_NAME')) or not settings.DEBUG


def require_auth(request: HttpRequest) -> User:
    """
    Require authentication. Raises AuthError (401) if not authenticated.
    """
    user = services.authenticate(request.COOKIES.get(SESSION_COOKIE_NAME))
    request.user = user
    return user


def set_session_cookie(response: HttpResponse, user: User) -> HttpResponse:
    token = create_session_token(user.id)
    response.set_cookie(SESSION_COOKIE_NAME, token, **get_session_cookie_settings(is_production()))
    return response


def clear_session_cookie(response: HttpResponse) -> HttpResponse:
    response.delete_cookie(SESSION_COOKIE_NAME, path='/', samesite='Strict')
    return response
