"""
Owned resource module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class ResourceNotFoundError(NotFoundError):
    """Raised when a resource is missing, soft-deleted, or no row was affected."""

    def __init__(self, label: str, resource_id: int):
        super().__init__(
            f"{label} is not found: {resource_id}",
            code="RESOURCE_NOT_FOUND",
            details={"resource": label, "resource_id": resource_id},
        )


class ResourceValidationError(ValidationError):
    """Raised when required payload fields are empty."""

    def __init__(self, label: str, fields: list[str]):
        message = ", ".join(f"{name.replace('_', ' ')} cannot be empty" for name in fields)
        super().__init__(
            message,
            code="INVALID_PAYLOAD",
            details={"resource": label, "fields": fields},
        )
