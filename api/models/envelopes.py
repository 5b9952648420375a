"""
Response envelopes.

Every endpoint answers with {message, data} on success and
{message, error} on failure.
"""

from typing import Any, Optional

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Standard success envelope."""

    message: str
    data: Any = None


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    message: str
    error: str
    details: Optional[dict[str, Any]] = None
