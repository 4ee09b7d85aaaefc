# Supabase admin client. Uses the service-role key, which bypasses RLS;
# never hand this client to anything browser-facing.
from functools import lru_cache

from supabase import Client, create_client


@lru_cache(maxsize=1)
def get_supabase(url: str, service_role_key: str) -> Client:
    return create_client(url, service_role_key)
