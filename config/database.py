"""
Database connection management.

Provides Supabase client singletons: the public (anon) client used for
dashboard reads, and the service-role client used by the holiday sync
to upsert. Sign-in gets its own short-lived client from
create_auth_client(), since a signed-in client sends the user's token
on every later request.
"""

from supabase import create_client, Client, ClientOptions
from functools import lru_cache
import structlog

from config.settings import settings
from exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


@lru_cache()
def get_supabase_client() -> Client:
    """
    Get cached Supabase client instance (anon key).

    Uses lru_cache to ensure only one client is created.
    Call get_supabase_client.cache_clear() to reconnect.

    Returns:
        Client: Supabase client

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_KEY is missing
    """
    if not settings.supabase_configured:
        logger.error(
            "supabase_not_configured",
            has_url=bool(settings.supabase_url),
            has_key=bool(settings.supabase_key)
        )
        raise ConfigurationError(
            "Missing database configuration",
            missing=[
                name for name, value in (
                    ("SUPABASE_URL", settings.supabase_url),
                    ("SUPABASE_KEY", settings.supabase_key),
                ) if not value
            ]
        )

    logger.info(
        "connecting_to_supabase",
        url=settings.supabase_url[:30] + "..."  # Log partial URL only
    )
    return create_client(settings.supabase_url, settings.supabase_key)


@lru_cache()
def get_admin_client() -> Client:
    """
    Get Supabase client with service role key (admin access).

    Needed for writes that bypass row level security, i.e. the
    holiday upsert.

    Returns:
        Client: Admin Supabase client

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_SERVICE_KEY is missing
    """
    if not settings.admin_configured:
        logger.error(
            "admin_client_not_configured",
            has_url=bool(settings.supabase_url),
            has_service_key=bool(settings.supabase_service_key)
        )
        raise ConfigurationError(
            "Missing database configuration",
            missing=[
                name for name, value in (
                    ("SUPABASE_URL", settings.supabase_url),
                    ("SUPABASE_SERVICE_KEY", settings.supabase_service_key),
                ) if not value
            ]
        )

    return create_client(settings.supabase_url, settings.supabase_service_key)


def create_auth_client() -> Client:
    """
    Create a fresh anon client for one sign-in.

    Never cached. The session is not persisted and not refreshed in the
    background; the access token lives in the caller's cookie.

    Returns:
        Client: Uncached Supabase client

    Raises:
        ConfigurationError: If SUPABASE_URL or SUPABASE_KEY is missing
    """
    if not settings.supabase_configured:
        raise ConfigurationError(
            "Missing database configuration",
            missing=[
                name for name, value in (
                    ("SUPABASE_URL", settings.supabase_url),
                    ("SUPABASE_KEY", settings.supabase_key),
                ) if not value
            ]
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


# ===================
# HELPER FUNCTIONS
# ===================

def check_connection() -> dict:
    """
    Check database connection health.

    Returns:
        dict: Connection status with details
    """
    try:
        client = get_supabase_client()

        holidays = client.table("feriados_ar").select("fecha", count="exact").limit(1).execute()

        return {
            "status": "healthy",
            "holidays_count": holidays.count,
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e)
        }
