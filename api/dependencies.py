"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

from modules.resources.models import ResourceKind

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.tokens import TokenIssuer, TokenSigner
    from modules.resources.interfaces import IResourceService
    from supabase import Client


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear all cached services for
    testing.
    """

    def __init__(self) -> None:
        self._db: "Client | None" = None
        self._signer: "TokenSigner | None" = None
        self._issuer: "TokenIssuer | None" = None
        self._auth_service: "IAuthService | None" = None
        self._resource_services: dict[ResourceKind, "IResourceService"] = {}

    @property
    def db(self) -> "Client":
        """Get the shared Supabase client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client()
        return self._db

    @property
    def signer(self) -> "TokenSigner":
        """Get the token signer, keyed from settings."""
        if self._signer is None:
            from modules.auth.tokens import TokenSigner
            from shared.config import get_settings
            settings = get_settings()
            self._signer = TokenSigner(
                secret=settings.jwt_secret,
                issuer=settings.jwt_issuer,
                audience=settings.jwt_audience,
                algorithm=settings.jwt_algorithm,
            )
        return self._signer

    @property
    def issuer(self) -> "TokenIssuer":
        """Get the concurrent token issuer."""
        if self._issuer is None:
            from modules.auth.tokens import TokenIssuer
            from shared.config import get_settings
            self._issuer = TokenIssuer.from_settings(self.signer, get_settings())
        return self._issuer

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.repository import (
                AccountRepository,
                ActivityRepository,
                UserRepository,
            )
            from modules.auth.service import AuthService
            from shared.config import get_settings
            self._auth_service = AuthService(
                accounts=AccountRepository(self.db),
                users=UserRepository(self.db),
                activities=ActivityRepository(self.db),
                signer=self.signer,
                issuer=self.issuer,
                bcrypt_rounds=get_settings().bcrypt_rounds,
            )
        return self._auth_service

    def resources(self, kind: ResourceKind) -> "IResourceService":
        """Get the service for one owned resource kind."""
        if kind not in self._resource_services:
            from modules.resources.models import RESOURCE_SPECS
            from modules.resources.repository import ResourceRepository
            from modules.resources.service import ResourceService
            self._resource_services[kind] = ResourceService(
                ResourceRepository(self.db, RESOURCE_SPECS[kind])
            )
        return self._resource_services[kind]

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._db = None
        self._signer = None
        self._issuer = None
        self._auth_service = None
        self._resource_services = {}


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_photo_service() -> "IResourceService":
    """FastAPI dependency for the photo service."""
    return get_container().resources(ResourceKind.PHOTO)


def get_comment_service() -> "IResourceService":
    """FastAPI dependency for the comment service."""
    return get_container().resources(ResourceKind.COMMENT)


def get_social_media_service() -> "IResourceService":
    """FastAPI dependency for the social media service."""
    return get_container().resources(ResourceKind.SOCIAL_MEDIA)
