"""
Owned resources module.

Photos, comments and social media entries: each record has one owning
user, and only that user may change or delete it.

Public API:
- IResourceService: Interface for resource operations
- ResourceKind / RESOURCE_SPECS: The supported kinds and their tables
- Resource exceptions: ResourceNotFoundError, ResourceValidationError
"""

from .exceptions import ResourceNotFoundError, ResourceValidationError
from .interfaces import IResourceService
from .models import (
    RESOURCE_SPECS,
    Comment,
    OwnedResource,
    Photo,
    ResourceKind,
    ResourceSpec,
    SocialMedia,
)

__all__ = [
    # Interface
    "IResourceService",
    # Models
    "ResourceKind",
    "ResourceSpec",
    "RESOURCE_SPECS",
    "OwnedResource",
    "Photo",
    "Comment",
    "SocialMedia",
    # Exceptions
    "ResourceNotFoundError",
    "ResourceValidationError",
]
