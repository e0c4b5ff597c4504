"""
Application error taxonomy.

Services raise these exceptions; the Ninja exception handlers registered by
register_exception_handlers() turn them into `{"message": ...}` JSON
responses with the matching HTTP status.

Usage:
    from apps.core.errors import NotFoundError

    post = Post.objects.filter(id=post_id).first()
    if not post:
        raise NotFoundError("Post not found")
"""
import logging
from typing import Optional

from django.core.exceptions import RequestDataTooBig
from ninja import NinjaAPI
from ninja.errors import HttpError, ValidationError as SchemaValidationError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = 400
    default_message = "Invalid input"


class AuthError(AppError):
    """Bad credentials or a missing/invalid/expired session token."""
    status_code = 401
    default_message = "Unauthorized"


class ConflictError(AppError):
    """A unique field (username, email) is already taken."""
    status_code = 400
    default_message = "Already exists"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ForbiddenError(AppError):
    """The requester does not own the resource."""
    status_code = 403
    default_message = "Unauthorized"


class InternalError(AppError):
    status_code = 500


def describe_schema_errors(errors: list) -> str:
    """Turn Ninja/pydantic error dicts into one human-readable line."""
    if not errors:
        return "Invalid input"
    first = errors[0]
    loc = [str(part) for part in first.get('loc', ()) if part not in ('body', 'payload', 'path', 'query')]
    msg = first.get('msg', 'Invalid input')
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(api: NinjaAPI) -> None:
    """Install the JSON error handlers on the API instance."""

    @api.exception_handler(AppError)
    def handle_app_error(request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.path} failed: {exc.message}")
        return api.create_response(request, {"message": exc.message}, status=exc.status_code)

    @api.exception_handler(SchemaValidationError)
    def handle_schema_error(request, exc: SchemaValidationError):
        return api.create_response(
            request,
            {"message": describe_schema_errors(exc.errors)},
            status=400,
        )

    @api.exception_handler(RequestDataTooBig)
    def handle_request_too_big(request, exc: RequestDataTooBig):
        logger.warning(f"Rejected oversized body on {request.method} {request.path}")
        return api.create_response(request, {"message": "Request body too large"}, status=413)

    @api.exception_handler(HttpError)
    def handle_http_error(request, exc: HttpError):
        return api.create_response(request, {"message": str(exc)}, status=exc.status_code)

    @api.exception_handler(Exception)
    def handle_unexpected_error(request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.path}: {exc}")
        return api.create_response(request, {"message": "Internal server error"}, status=500)
