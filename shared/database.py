"""
Supabase client for the account, user, activity and resource tables.

One service-role client is shared by every repository. Row ownership is
enforced by the service layer, so the client bypasses RLS.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from .config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Client:
    """
    Build the service-role client on first use and reuse it afterwards.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset.
            Nothing is cached in that case.
    """
    settings = get_settings()
    missing = [
        name
        for name, value in (
            ("SUPABASE_URL", settings.supabase_url),
            ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
        )
        if not value
    ]
    if missing:
        raise RuntimeError(f"Supabase configuration missing: set {', '.join(missing)}")

    logger.info("Connecting to Supabase at %s", settings.supabase_url)
    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def reset_client_cache() -> None:
    """Drop the cached client so the next call rebuilds it from current settings."""
    get_supabase_client.cache_clear()
