import functools
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An internal server error occurred."

T = TypeVar("T")


class AppError(Exception):
    """Base class for errors rendered as structured `{"message": ...}` responses."""

    status_code = 500

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class PersistenceError(AppError):
    """
    The storage collaborator reported a failure.
    400 when the caller can correct it (message is surfaced),
    500 otherwise (message must already be safe to show).
    """

    status_code = 400


class InternalError(AppError):
    status_code = 500

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE):
        super().__init__(message)


def handle_unexpected(operation: str):
    """Wraps an async service entry point so only `AppError`s leave it."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                logger.exception(f"Unexpected failure in {operation}: {e}")
                raise InternalError() from e

        return wrapper

    return decorator
