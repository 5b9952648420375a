"""
Owned resource service implementation.

Every mutation runs the ownership check before payload validation and
before storage is touched.
"""

import logging

from modules.auth.authorization import (
    authorize_create,
    authorize_delete,
    authorize_update,
    ensure_allowed,
)

from .exceptions import ResourceNotFoundError, ResourceValidationError
from .interfaces import IResourceService
from .models import OwnedResource, ResourcePayload, ResourceSpec
from .repository import ResourceRepository

logger = logging.getLogger(__name__)


class ResourceService(IResourceService):
    """CRUD for one resource kind, gated by ownership."""

    def __init__(self, repository: ResourceRepository):
        self._repository = repository

    @property
    def spec(self) -> ResourceSpec:
        return self._repository.spec

    async def list_all(self) -> list[OwnedResource]:
        return self._repository.get_all()

    async def get(self, resource_id: int) -> OwnedResource:
        resource = self._repository.get_by_id(resource_id)
        if resource is None:
            raise ResourceNotFoundError(self.spec.label, resource_id)
        return resource

    async def create(self, principal_id: int, payload: ResourcePayload) -> OwnedResource:
        ensure_allowed(
            authorize_create(principal_id, payload.user_id),
            action=f"create {self.spec.label}",
        )
        self._validate(payload)

        created = self._repository.create(payload.model_dump())
        logger.info("User %s created %s %s", principal_id, self.spec.label, created.id)
        return created

    async def update(
        self,
        principal_id: int,
        resource_id: int,
        payload: ResourcePayload,
    ) -> OwnedResource:
        existing = await self.get(resource_id)
        ensure_allowed(
            authorize_update(principal_id, payload.user_id, existing.user_id),
            action=f"update {self.spec.label}",
        )
        self._validate(payload)

        updated = self._repository.update(resource_id, payload.model_dump())
        logger.info("User %s updated %s %s", principal_id, self.spec.label, resource_id)
        return updated

    async def delete(self, principal_id: int, resource_id: int) -> OwnedResource:
        existing = await self.get(resource_id)
        ensure_allowed(
            authorize_delete(existing.user_id, principal_id),
            action=f"delete {self.spec.label}",
        )

        deleted = self._repository.delete(resource_id)
        logger.info("User %s deleted %s %s", principal_id, self.spec.label, resource_id)
        return deleted

    def _validate(self, payload: ResourcePayload) -> None:
        missing = payload.missing_fields()
        if missing:
            raise ResourceValidationError(self.spec.label, missing)
