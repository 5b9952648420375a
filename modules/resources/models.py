"""
Owned resource data models.

Photos, comments and social media entries all carry an owner user_id
and share the same lifecycle; ResourceSpec ties each kind to its table,
its stored model and its request payload.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, Field


class ResourceKind(str, Enum):
    PHOTO = "photo"
    COMMENT = "comment"
    SOCIAL_MEDIA = "socmed"


# -----------------------------------------------------------------------------
# Stored records
# -----------------------------------------------------------------------------


class OwnedResource(BaseModel):
    """Fields common to every owned record."""

    id: int
    user_id: int = Field(..., description="Owning user id")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class Photo(OwnedResource):
    title: str
    caption: str = ""
    photo_url: str


class Comment(OwnedResource):
    photo_id: int
    message: str


class SocialMedia(OwnedResource):
    name: str
    social_media_url: str


# -----------------------------------------------------------------------------
# Request payloads
# -----------------------------------------------------------------------------


class ResourcePayload(BaseModel):
    """
    Body of a create or update request.

    Content fields default to empty strings; required_fields lists the
    ones the service rejects when empty (after the ownership check).
    """

    user_id: int

    required_fields: ClassVar[tuple[str, ...]] = ()

    def missing_fields(self) -> list[str]:
        return [name for name in self.required_fields if not getattr(self, name)]


class PhotoPayload(ResourcePayload):
    title: str = ""
    caption: str = ""
    photo_url: str = ""

    required_fields: ClassVar[tuple[str, ...]] = ("title", "photo_url")


class CommentPayload(ResourcePayload):
    photo_id: int
    message: str = ""

    required_fields: ClassVar[tuple[str, ...]] = ("message",)


class SocialMediaPayload(ResourcePayload):
    name: str = ""
    social_media_url: str = ""

    required_fields: ClassVar[tuple[str, ...]] = ("name", "social_media_url")


@dataclass(frozen=True)
class ResourceSpec:
    """Everything that differs between resource kinds."""

    kind: ResourceKind
    table: str
    label: str
    model: type[OwnedResource]
    payload: type[ResourcePayload]


RESOURCE_SPECS: dict[ResourceKind, ResourceSpec] = {
    ResourceKind.PHOTO: ResourceSpec(
        kind=ResourceKind.PHOTO,
        table="photo",
        label="photo",
        model=Photo,
        payload=PhotoPayload,
    ),
    ResourceKind.COMMENT: ResourceSpec(
        kind=ResourceKind.COMMENT,
        table="comment",
        label="comment",
        model=Comment,
        payload=CommentPayload,
    ),
    ResourceKind.SOCIAL_MEDIA: ResourceSpec(
        kind=ResourceKind.SOCIAL_MEDIA,
        table="socialmedia",
        label="social media",
        model=SocialMedia,
        payload=SocialMediaPayload,
    ),
}
