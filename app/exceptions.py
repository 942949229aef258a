from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors raised by services and turned into JSON by the API layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: machine-readable error code, defaults to the class-level code
        http_status: HTTP status code the handler responds with
    """

    http_status = 500
    default_message = "Internal error"
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnauthorizedError(AppError):
    """Raised when the admin credentials are missing or wrong."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    """Raised when the caller may not act on the resource (e.g. editing a user's message)."""

    http_status = 403
    default_message = "Forbidden"
    default_code = "FORBIDDEN"


class NotFoundError(AppError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ServiceUnavailableError(AppError):
    """Raised when an operation gave up, e.g. no unique code after the retry budget."""

    http_status = 500
    default_message = "Service unavailable"
    default_code = "SERVICE_UNAVAILABLE"
