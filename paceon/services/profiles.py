"""Batched, cached profile lookups for feed/comment enrichment."""
import logging
from typing import Dict, Iterable, List

from paceon.core.cache import TTLCache
from paceon.core.metrics import RESOLVER_FALLBACKS
from paceon.database.store import ProfileStore, StoreError
from paceon.schemas import ResolutionSource, Resolved, UserProfile

logger = logging.getLogger(__name__)


class ProfileResolver:
    """Resolves user ids to profiles, one store round-trip per batch of misses.

    Ids the store does not return (or every id, when the store is down) get a
    placeholder profile, which is cached like a real one. Resolution never
    raises.
    """

    def __init__(self, cache: TTLCache[Resolved], store: ProfileStore, placeholder_name: str = "Unknown User"):
        self.cache = cache
        self.store = store
        self.placeholder_name = placeholder_name

    def placeholder(self, user_id: str) -> UserProfile:
        return UserProfile(id=user_id, display_name=self.placeholder_name, avatar_url=None)

    async def resolve_detailed(self, user_ids: Iterable[str]) -> Dict[str, Resolved]:
        ids = list(dict.fromkeys(user_ids))
        found: Dict[str, Resolved] = {}
        uncached: List[str] = []

        for user_id in ids:
            hit = self.cache.get(user_id)
            if hit is not None:
                found[user_id] = hit.model_copy(update={"cached": True})
            else:
                uncached.append(user_id)

        if uncached:
            found.update(await self._fetch(uncached))

        return {user_id: found[user_id] for user_id in ids}

    async def resolve(self, user_ids: Iterable[str]) -> Dict[str, UserProfile]:
        resolved = await self.resolve_detailed(user_ids)
        return {user_id: entry.value for user_id, entry in resolved.items()}

    async def _fetch(self, user_ids: List[str]) -> Dict[str, Resolved]:
        try:
            profiles = await self.store.fetch_profiles(user_ids)
        except StoreError as e:
            logger.error(f"Error fetching profiles: {e}")
            profiles = []

        wanted = set(user_ids)
        fetched: Dict[str, Resolved] = {}
        for profile in profiles:
            if profile.id not in wanted:
                continue
            entry = Resolved(value=profile, source=ResolutionSource.STORE)
            self.cache.set(profile.id, entry)
            fetched[profile.id] = entry

        missing = [user_id for user_id in user_ids if user_id not in fetched]
        if missing:
            RESOLVER_FALLBACKS.labels(resolver="profiles").inc(len(missing))
            logger.warning(f"Using placeholder profile for {len(missing)} user(s)")
        for user_id in missing:
            entry = Resolved(value=self.placeholder(user_id), source=ResolutionSource.FALLBACK)
            self.cache.set(user_id, entry)
            fetched[user_id] = entry
        return fetched
