"""
Owned resource repository for database access.

One class serves the photo, comment and socialmedia tables; the
ResourceSpec passed at construction picks the table and row model.
Deletes are soft: they set deleted_at, and soft-deleted rows are
invisible to every read.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from supabase import Client

from shared.repository import BaseRepository

from .exceptions import ResourceNotFoundError
from .models import OwnedResource, ResourceSpec

DEFAULT_LIST_LIMIT = 20


class ResourceRepository(BaseRepository[OwnedResource]):
    """
    Repository for one kind of owned resource.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying ownership.
    """

    def __init__(self, db: Client, spec: ResourceSpec) -> None:
        super().__init__(db)
        self._spec = spec

    @property
    def spec(self) -> ResourceSpec:
        return self._spec

    def get_all(self, limit: int = DEFAULT_LIST_LIMIT) -> list[OwnedResource]:
        """Newest live records first."""
        result = self._execute(
            self._db.table(self._spec.table)
            .select("*")
            .is_("deleted_at", "null")
            .order("created_at", desc=True)
            .limit(limit),
            f"list {self._spec.label}",
        )
        return [self._map(row) for row in result.data]

    def get_by_id(self, resource_id: int) -> Optional[OwnedResource]:
        result = self._execute(
            self._db.table(self._spec.table)
            .select("*")
            .eq("id", resource_id)
            .is_("deleted_at", "null")
            .limit(1),
            f"get {self._spec.label}",
        )
        if not result.data:
            return None
        return self._map(result.data[0])

    def create(self, data: dict[str, Any]) -> OwnedResource:
        result = self._execute(
            self._db.table(self._spec.table).insert(data),
            f"create {self._spec.label}",
        )
        return self._map(result.data[0])

    def update(self, resource_id: int, data: dict[str, Any]) -> OwnedResource:
        """
        Update a live record.

        Raises:
            ResourceNotFoundError: If no row was affected.
        """
        changes = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        result = self._execute(
            self._db.table(self._spec.table)
            .update(changes)
            .eq("id", resource_id)
            .is_("deleted_at", "null"),
            f"update {self._spec.label}",
        )
        if not result.data:
            raise ResourceNotFoundError(self._spec.label, resource_id)
        return self._map(result.data[0])

    def delete(self, resource_id: int) -> OwnedResource:
        """
        Soft-delete a live record and return it.

        Raises:
            ResourceNotFoundError: If no row was affected.
        """
        result = self._execute(
            self._db.table(self._spec.table)
            .update({"deleted_at": datetime.now(timezone.utc).isoformat()})
            .eq("id", resource_id)
            .is_("deleted_at", "null"),
            f"delete {self._spec.label}",
        )
        if not result.data:
            raise ResourceNotFoundError(self._spec.label, resource_id)
        return self._map(result.data[0])

    def _map(self, row: dict[str, Any]) -> OwnedResource:
        return self._spec.model(**row)
