"""Async profile/role store used by the resolvers.

The Supabase client is synchronous, so queries run in a worker thread.
Any client-side failure is reported as :class:`StoreError`.
"""
import asyncio
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from paceon.database import crud
from paceon.schemas import UserProfile


class StoreError(Exception):
    """The persistent store could not answer the query."""


class ProfileStore(Protocol):
    """Profile/role source for the resolvers.

    Implementations report every failure, including malformed rows, as
    :class:`StoreError`; the resolvers fall back on that and nothing else.
    """

    async def fetch_profiles(self, user_ids: Sequence[str]) -> List[UserProfile]:
        ...

    async def fetch_role(self, user_id: str) -> Optional[str]:
        ...


def profile_from_row(row: Dict[str, Any], placeholder_name: str = "Unknown User") -> UserProfile:
    return UserProfile(
        id=str(row["id"]),
        display_name=row.get("full_name") or placeholder_name,
        avatar_url=row.get("avatar_url"),
    )


class SupabaseProfileStore:
    def __init__(self, client: Client, table: str = "users_profile", placeholder_name: str = "Unknown User"):
        self.client = client
        self.table = table
        self.placeholder_name = placeholder_name

    async def fetch_profiles(self, user_ids: Sequence[str]) -> List[UserProfile]:
        try:
            rows = await asyncio.to_thread(crud.get_profiles_by_ids, self.client, list(user_ids), self.table)
        except (APIError, httpx.HTTPError) as e:
            raise StoreError(f"profile fetch failed: {e}") from e
        try:
            return [profile_from_row(row, self.placeholder_name) for row in rows]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise StoreError(f"malformed profile row: {e}") from e

    async def fetch_role(self, user_id: str) -> Optional[str]:
        try:
            return await asyncio.to_thread(crud.get_user_role, self.client, user_id, self.table)
        except (APIError, httpx.HTTPError, AttributeError, TypeError) as e:
            raise StoreError(f"role fetch failed for {user_id}: {e}") from e
