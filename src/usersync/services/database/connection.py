"""Supabase database connection management."""

from functools import lru_cache

from supabase import Client, create_client

from src.usersync.config import settings


@lru_cache(maxsize=1)
def get_supabase_admin_client() -> Client:
    """
    Get Supabase admin client with service role key (singleton pattern).

    Webhook deliveries carry no end-user session, so user records are written
    with the service role key, which bypasses Row-Level Security.

    ⚠️ WARNING: This client has full database access. Only use it behind
    webhook signature verification.

    Returns:
        Configured Supabase client with service role key (bypasses RLS)

    Example:
        >>> client = get_supabase_admin_client()
        >>> response = client.table("users").select("*").eq("clerk_id", "user_123").execute()
    """
    return create_client(settings.supabase_url, settings.supabase_service_role_key)
