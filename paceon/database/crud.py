# paceon/database/crud.py
from typing import Any, Dict, List, Optional, Sequence

from supabase import Client

PROFILE_COLUMNS = "id, full_name, avatar_url"


def get_profiles_by_ids(client: Client, user_ids: Sequence[str], table: str = "users_profile") -> List[Dict[str, Any]]:
    """Fetches profile rows whose id is in ``user_ids`` with a single query."""
    if not user_ids:
        return []
    response = client.table(table).select(PROFILE_COLUMNS).in_("id", list(user_ids)).execute()
    return response.data or []


def get_user_role(client: Client, user_id: str, table: str = "users_profile") -> Optional[str]:
    """Returns the role column for one user, or None when the row or value is missing."""
    response = client.table(table).select("role").eq("id", user_id).limit(1).execute()
    rows = response.data or []
    if not rows:
        return None
    return rows[0].get("role") or None
