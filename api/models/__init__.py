"""API models package."""

from .envelopes import SuccessResponse, ErrorResponse

__all__ = [
    "SuccessResponse",
    "ErrorResponse",
]
