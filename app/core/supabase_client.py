from functools import lru_cache
from supabase import Client, create_client
from app.core.config import settings

# Each factory builds its client once per process; callers receive it
# through FastAPI dependencies.

@lru_cache()
def get_supabase_client() -> Client:
    """Row access and bearer-token verification."""
    return create_client(settings.supabase_url, settings.supabase_key)


@lru_cache()
def get_supabase_session_client() -> Client:
    """
    Password sign-in and signup. Kept apart from the data client because a
    successful sign-in attaches that user's session to the client it ran on.
    """
    return create_client(settings.supabase_url, settings.supabase_key)


@lru_cache()
def get_supabase_admin_client() -> Client:
    """Service-role client, only needed for admin user lookups during login."""
    key = settings.supabase_service_role_key or settings.supabase_key
    return create_client(settings.supabase_url, key)
