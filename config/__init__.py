"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    get_supabase_client: Public (anon key) Supabase client
    get_admin_client: Service-role Supabase client
    create_auth_client: Uncached client for one sign-in
    check_connection: Health check function
"""

from config.settings import settings, get_settings, Settings
from config.database import (
    get_supabase_client,
    get_admin_client,
    create_auth_client,
    check_connection,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Database
    "get_supabase_client",
    "get_admin_client",
    "create_auth_client",
    "check_connection",
]
