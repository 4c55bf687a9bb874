"""Exception types shared by routers and services."""

from typing import Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base HTTP exception with a default detail message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class BadRequestException(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request"


class UnauthorizedException(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class ForbiddenException(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not an admin"


class NotFoundException(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class ConflictException(AppException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"


class BadGatewayException(AppException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream service error"


# ============= Domain errors =============

class RosterApiError(Exception):
    """
    Failure talking to the external roster API.

    status_code is None for transport failures (no response received),
    otherwise the upstream HTTP status. server_message holds the message
    the API put in its error body, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        timed_out: bool = False,
        server_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.timed_out = timed_out
        self.server_message = server_message


class PlatformError(Exception):
    """Metadata lookup against Mixcloud or SoundCloud failed for one URL."""

    def __init__(self, url: str, message: str, platform: Optional[str] = None):
        super().__init__(message)
        self.url = url
        self.message = message
        self.platform = platform


class NoUrlsProvidedError(ValueError):
    """Bulk import text contained no URLs after trimming."""

    def __init__(self, message: str = "No URLs provided"):
        super().__init__(message)
        self.message = message


class FormValidationException(AppException):
    """Field-level validation errors from a form."""

    status_code = 422
    default_detail = "Please correct the highlighted fields"

    def __init__(self, errors: dict[str, str]):
        super().__init__()
        self.errors = errors
        self.detail = {"message": self.default_detail, "errors": errors}
