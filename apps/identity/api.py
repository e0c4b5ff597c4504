"""
Identity API endpoints with JWT cookie sessions.

auth_router:  signup, login, logout, me
users_router: profiles, suggestions, follow/unfollow, profile update
"""
from typing import List
from uuid import UUID

from django.http import HttpRequest, HttpResponse
from ninja import Router

from apps.core.errors import AuthError, NotFoundError
from .dtos import LoginIn, MessageOut, ProfileUpdateIn, SignupIn, UserOut
from .follow_service import follow_unfollow
from .models import User
from .security import clear_session_cookie, require_auth, set_session_cookie
from . import services

auth_router = Router(tags=["Auth"])
users_router = Router(tags=["Users"])


def _user_response(user: User, status: int = 200) -> HttpResponse:
    return HttpResponse(
        UserOut.from_orm(user).model_dump_json(by_alias=True),
        content_type='application/json',
        status=status,
    )


# =============================================================================
# Auth Endpoints
# =============================================================================

@auth_router.post("/signup", response={201: UserOut}, auth=None)
def signup(request: HttpRequest, payload: SignupIn):
    """
    Create an account and start a session.

    Returns the new user, sets the `jwt` cookie.
    """
    user = services.signup(
        username=payload.username,
        full_name=payload.fullName,
        email=payload.email,
        password=payload.password,
    )
    return set_session_cookie(_user_response(user, status=201), user)


@auth_router.post("/login", response=UserOut, auth=None)
def login(request: HttpRequest, payload: LoginIn):
    """
    Authenticate user and set the session cookie.

    Every failure is reported as 400 and no cookie is set.
    """
    try:
        user = services.login(payload.username, payload.password)
    except (NotFoundError, AuthError) as exc:
        exc.status_code = 400
        raise

    return set_session_cookie(_user_response(user), user)


@auth_router.post("/logout", response=MessageOut, auth=None)
def logout(request: HttpRequest):
    """
    Clear the session cookie. Tokens are stateless, so the client
    discarding the cookie is the whole logout.
    """
    response = HttpResponse(
        MessageOut(message="Logged out successfully").model_dump_json(),
        content_type='application/json',
    )
    return clear_session_cookie(response)


@auth_router.get("/me", response=UserOut, by_alias=True, auth=None)
def me(request: HttpRequest):
    """Get current authenticated user's profile."""
    return require_auth(request)


# =============================================================================
# User Endpoints
# =============================================================================

@users_router.get("/profile/{username}", response=UserOut, by_alias=True, auth=None)
def get_user_profile(request: HttpRequest, username: str):
    require_auth(request)
    return services.get_profile(username)


@users_router.get("/suggested", response=List[UserOut], by_alias=True, auth=None)
def get_suggested_users(request: HttpRequest):
    """Up to three users the current user does not follow yet."""
    user = require_auth(request)
    return services.suggested_users(user)


@users_router.post("/follow/{user_id}", response=MessageOut, auth=None)
def follow_unfollow_user(request: HttpRequest, user_id: UUID):
    """Follow the user, or unfollow if already following."""
    user = require_auth(request)
    if follow_unfollow(user, user_id):
        return {"message": "Followed user"}
    return {"message": "Unfollowed user"}


@users_router.post("/update", response=UserOut, by_alias=True, auth=None)
def update_user_profile(request: HttpRequest, payload: ProfileUpdateIn):
    user = require_auth(request)
    return services.update_profile(user, payload.model_dump())
