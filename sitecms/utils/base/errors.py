from typing import Any

from fastapi import HTTPException


class AppError(HTTPException):
    """Base for every failure that is rendered in the response envelope.

    Subclasses pin the status code and a default message; `errors` carries
    field-level details for validation failures.
    """
    status_code: int = 500
    default_message: str = "Server Error"

    def __init__(self, message: str | None = None, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(status_code=type(self).status_code, detail=message or self.default_message)
        self.errors = errors

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationFailed(AppError):
    status_code = 400
    default_message = "Validation failed"


class Conflict(AppError):
    status_code = 400
    default_message = "Duplicate field value entered"


class InvalidInput(AppError):
    status_code = 400
    default_message = "Invalid identifier"


class InvalidOperation(AppError):
    status_code = 400
    default_message = "Operation not allowed"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Not authorized to access this route"


class TokenExpired(Unauthorized):
    default_message = "Token has expired"


class TokenInvalid(Unauthorized):
    default_message = "Invalid token"


class Forbidden(AppError):
    status_code = 403
    default_message = "Access denied"


class NotFound(AppError):
    status_code = 404
    default_message = "Resource not found"


class Internal(AppError):
    status_code = 500


class MediaStoreError(Internal):
    default_message = "Media store request failed"
