"""
Domain errors raised by the authentication and task services.

Each error carries the HTTP status it maps to and a public detail message.
The message never depends on which internal check failed, so callers cannot
tell a missing resource from one owned by somebody else, or an unknown email
from a wrong password.
"""

from fastapi import status


class TaskManagerError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidCredentialsError(TaskManagerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Incorrect email or password"
    headers = {"WWW-Authenticate": "Bearer"}


class UnauthenticatedError(TaskManagerError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Could not validate credentials"
    headers = {"WWW-Authenticate": "Bearer"}


class TaskNotFoundOrForbiddenError(TaskManagerError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Task not found or access denied"


class DuplicateEmailError(TaskManagerError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Email already registered"


class UserNotFoundError(TaskManagerError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"
