"""
core/exceptions.py
------------------
Domain error taxonomy raised by the service layer.

Services never build HTTP responses; they raise one of these and the global
handlers in main.py render it into the response envelope:

  ValidationFailed  → 400  malformed input / unknown org_id (field-level detail)
  NotFound          → 404  referenced id does not exist
  Conflict          → 400  duplicate email, organization still has users
  StoreUnavailable  → 500  persistence failure (no internal detail leaked)
"""

from functools import wraps
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class DomainError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, errors: Optional[List[dict]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationFailed(DomainError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(DomainError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(DomainError):
    # The API contract reports business-rule conflicts as 400, not 409
    status_code = status.HTTP_400_BAD_REQUEST


class StoreUnavailable(DomainError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _find_session(args: tuple, kwargs: dict) -> Optional[AsyncSession]:
    for value in (*args, *kwargs.values()):
        if isinstance(value, AsyncSession):
            return value
    return None


def translate_store_errors(
    message: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Wrap an async service method so raw SQLAlchemy errors never escape.

    Domain errors propagate untouched. Any SQLAlchemyError rolls back the
    session passed to the method and is re-raised as StoreUnavailable
    carrying only the generic `message`.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except DomainError:
                raise
            except SQLAlchemyError as exc:
                db = _find_session(args, kwargs)
                if db is not None:
                    await db.rollback()
                logger.error(
                    "Store operation failed",
                    operation=func.__qualname__,
                    error=str(exc),
                    exc_info=True,
                )
                raise StoreUnavailable(message) from exc

        return wrapper

    return decorator
