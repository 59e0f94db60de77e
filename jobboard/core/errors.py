"""Error types raised by services and rendered by the app as ``{"error": message}``."""

from fastapi import status


class JobBoardError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class AuthError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid login credentials"


class InvalidRoleError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid role"


class InvalidTokenError(JobBoardError):
    # One message for every failure so callers cannot tell which check failed.
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class ForbiddenError(JobBoardError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(JobBoardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UpstreamError(JobBoardError):
    """Identity provider or datastore failure.

    400 when the provider rejected the request, 500 when it or the datastore
    could not be reached or failed.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Upstream service failure"


class UnexpectedError(JobBoardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
