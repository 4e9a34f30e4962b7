"""
core/exceptions.py
------------------
Domain error taxonomy.

Services raise these; the handler registered in main.py renders every one of
them as  {"message": "<text>"}  with the matching HTTP status. No structured
error codes are exposed beyond the status itself.
"""

from typing import Dict, Optional


class AppError(Exception):
    status_code: int = 500
    message: str = "Internal Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.message = message or self.message
        self.headers = headers
        super().__init__(self.message)


class UnauthorizedError(AppError):
    """Missing or malformed credential."""
    status_code = 401
    message = "Unauthorized"


class BadRequestError(AppError):
    """Missing required header or malformed input."""
    status_code = 400
    message = "Bad request"


class ForbiddenError(AppError):
    """
    Credential present but the tenant or origin binding fails.
    Both causes share the 403 status; only the message tells them apart.
    """
    status_code = 403
    message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    message = "Not found"


class ConflictError(AppError):
    status_code = 409
    message = "Conflict"


class InternalServerError(AppError):
    status_code = 500
    message = "Internal Server Error"
