"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    signer: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Returns 503 until the database and token signing key are configured.
    """
    settings = get_settings()
    database = (
        "configured"
        if settings.supabase_url and settings.supabase_service_role_key
        else "missing"
    )
    signer = "configured" if settings.jwt_secret else "missing"

    ready = database == "configured" and signer == "configured"
    body = ReadinessResponse(
        status="ready" if ready else "not_ready",
        database=database,
        signer=signer,
    )
    return JSONResponse(status_code=200 if ready else 503, content=body.model_dump())
