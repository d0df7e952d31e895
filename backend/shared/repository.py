"""
Base repository class for database access.

Encapsulates Supabase client access and the translation of PostgREST
and transport failures into StoreError, so services never see client exceptions.
"""

import asyncio
from typing import Any, Callable, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import StoreError


T = TypeVar("T")

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


async def run_blocking(fn: Callable[..., T], *args: Any) -> T:
    """
    Run a synchronous store call off the event loop.

    The Supabase client is synchronous; awaiting it through a worker thread
    lets callers bound the wait with asyncio.wait_for.
    """
    return await asyncio.to_thread(fn, *args)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() wrapper that maps APIError and transport errors to StoreError

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            def get_by_id(self, profile_id: str) -> Optional[Profile]:
                result = self._execute(
                    "get_by_id",
                    lambda: self._db.table("profiles").select("*").eq("id", profile_id).execute(),
                )
                if not result.data:
                    return None
                return Profile.from_row(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, operation: str, query: Callable[[], Any]) -> Any:
        """
        Run a query, converting PostgREST and transport errors into StoreError.

        Args:
            operation: Name used in logs and error details.
            query: Zero-argument callable that executes the request.

        Raises:
            StoreError: If the request fails. details["sqlstate"] carries
                the PostgreSQL error code when one is available.
        """
        try:
            return query()
        except APIError as e:
            raise StoreError(
                f"{operation} failed: {e.message}",
                operation=operation,
                details={"sqlstate": e.code},
            ) from e
        except httpx.HTTPError as e:
            raise StoreError(
                f"{operation} failed: {e.__class__.__name__}: {e}",
                operation=operation,
                details={"transport": e.__class__.__name__},
            ) from e

    @staticmethod
    def is_unique_violation(error: StoreError) -> bool:
        """Whether a StoreError was caused by a unique constraint."""
        return error.details.get("sqlstate") == UNIQUE_VIOLATION
