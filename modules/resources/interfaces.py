"""
Owned resource module interface.

The API layer depends on IResourceService; one implementation instance
exists per resource kind.
"""

from typing import Protocol, runtime_checkable

from .models import OwnedResource, ResourcePayload, ResourceSpec


@runtime_checkable
class IResourceService(Protocol):
    """Interface for owned resource operations."""

    @property
    def spec(self) -> ResourceSpec:
        """The resource kind this service manages."""
        ...

    async def list_all(self) -> list[OwnedResource]:
        """List the newest live records."""
        ...

    async def get(self, resource_id: int) -> OwnedResource:
        """
        Get one record.

        Raises:
            ResourceNotFoundError: If missing or soft-deleted
        """
        ...

    async def create(self, principal_id: int, payload: ResourcePayload) -> OwnedResource:
        """
        Create a record owned by the principal.

        Raises:
            OwnershipError: If payload.user_id is not the principal
            ResourceValidationError: If a required field is empty
        """
        ...

    async def update(
        self,
        principal_id: int,
        resource_id: int,
        payload: ResourcePayload,
    ) -> OwnedResource:
        """
        Update a record the principal owns.

        Raises:
            ResourceNotFoundError: If missing
            OwnershipError: If the record or payload owner is not the principal
            ResourceValidationError: If a required field is empty
        """
        ...

    async def delete(self, principal_id: int, resource_id: int) -> OwnedResource:
        """
        Soft-delete a record the principal owns.

        Raises:
            ResourceNotFoundError: If missing
            OwnershipError: If the record is not the principal's
        """
        ...
