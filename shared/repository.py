"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating client failures into the
service's storage exceptions.
"""

import logging
from typing import TypeVar, Generic, Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ConflictError, StorageError, ValidationError


T = TypeVar("T")

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATEs
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() which runs a query and maps client errors

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class PhotoRepository(BaseRepository[Photo]):
            def get_by_id(self, photo_id: int) -> Optional[Photo]:
                result = self._execute(
                    self._db.table("photo").select("*").eq("id", photo_id),
                    "get photo",
                )
                if not result.data:
                    return None
                return Photo(**result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any, action: str) -> Any:
        """
        Execute a PostgREST query builder.

        Args:
            query: A query builder with an execute() method.
            action: Short description used in logs and error messages.

        Returns:
            The API response (with .data).

        Raises:
            ConflictError: If the write violates a unique constraint.
            ValidationError: If the write points at a row that does not exist.
            StorageError: For any other database or transport failure.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictError(
                    f"Duplicate record: {action}",
                    code="DUPLICATE_RECORD",
                    details={"action": action},
                ) from e
            if e.code == FOREIGN_KEY_VIOLATION:
                raise ValidationError(
                    f"Referenced record does not exist: {action}",
                    code="MISSING_REFERENCE",
                    details={"action": action},
                ) from e
            logger.error("Database error during %s: %s (code=%s)", action, e.message, e.code)
            raise StorageError(f"Database error during {action}", details={"action": action}) from e
        except httpx.HTTPError as e:
            logger.error("Database unreachable during %s: %s", action, e)
            raise StorageError(f"Database unreachable during {action}", details={"action": action}) from e
