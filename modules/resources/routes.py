"""
Owned resource API endpoints.

One router per resource kind, built by create_resource_router. Reads
are public; mutations need a bearer token and act as the token's user.
"""

from typing import Callable

from fastapi import APIRouter, Depends, Query

from api.middleware.auth import get_current_user
from api.models import SuccessResponse
from modules.auth.models import User

from .interfaces import IResourceService
from .models import ResourceSpec


def create_resource_router(
    spec: ResourceSpec,
    service_dependency: Callable[[], IResourceService],
) -> APIRouter:
    """
    Build the list/get/create/update/delete routes for one resource kind.

    Args:
        spec: The resource kind; its payload model types the request body
        service_dependency: FastAPI dependency returning the kind's service
    """
    router = APIRouter()
    payload_model = spec.payload
    label = spec.label

    @router.get("/all", response_model=SuccessResponse)
    async def list_resources(
        service: IResourceService = Depends(service_dependency),
    ) -> SuccessResponse:
        """List the newest records, most recent first."""
        records = await service.list_all()
        return SuccessResponse(message=f"success get {label}s", data=records)

    @router.get("", response_model=SuccessResponse)
    async def get_resource(
        resource_id: int = Query(..., alias="id", ge=1),
        service: IResourceService = Depends(service_dependency),
    ) -> SuccessResponse:
        record = await service.get(resource_id)
        return SuccessResponse(message=f"success find {label}", data=record)

    @router.post("", response_model=SuccessResponse, status_code=202)
    async def create_resource(
        payload: payload_model,
        user: User = Depends(get_current_user),
        service: IResourceService = Depends(service_dependency),
    ) -> SuccessResponse:
        """Create a record. payload.user_id must be the caller's id."""
        record = await service.create(user.id, payload)
        return SuccessResponse(message=f"success create {label}", data=record)

    @router.put("/{resource_id}", response_model=SuccessResponse, status_code=202)
    async def update_resource(
        resource_id: int,
        payload: payload_model,
        user: User = Depends(get_current_user),
        service: IResourceService = Depends(service_dependency),
    ) -> SuccessResponse:
        """Update a record the caller owns; ownership cannot be reassigned."""
        record = await service.update(user.id, resource_id, payload)
        return SuccessResponse(message=f"success update {label}", data=record)

    @router.delete("/{resource_id}", response_model=SuccessResponse, status_code=202)
    async def delete_resource(
        resource_id: int,
        user: User = Depends(get_current_user),
        service: IResourceService = Depends(service_dependency),
    ) -> SuccessResponse:
        record = await service.delete(user.id, resource_id)
        return SuccessResponse(message=f"success delete {label}", data=record)

    return router
