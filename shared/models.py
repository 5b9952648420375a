"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedPrincipal(BaseModel):
    """
    The bearer of a verified access token.

    Built from the access claim by the auth middleware and passed
    explicitly to route handlers via dependency injection.
    """

    principal_id: str = Field(..., description="Account UUID or user id, as carried in the token")
    kind: str = Field(default="user", description="Principal table: account or user")
    role: str = Field(default="normal", description="Principal role")
    session_id: str = Field(..., description="Login activity id (token JTI)")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
