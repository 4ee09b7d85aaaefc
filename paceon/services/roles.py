import logging

from paceon.core.cache import TTLCache
from paceon.core.metrics import RESOLVER_FALLBACKS
from paceon.database.store import ProfileStore, StoreError
from paceon.schemas import ResolutionSource, Resolved

logger = logging.getLogger(__name__)


class RoleResolver:
    """Cached role lookup. Falls back to (and caches) the default role."""

    def __init__(self, cache: TTLCache[Resolved], store: ProfileStore, default_role: str = "user"):
        self.cache = cache
        self.store = store
        self.default_role = default_role

    async def resolve_detailed(self, user_id: str) -> Resolved:
        hit = self.cache.get(user_id)
        if hit is not None:
            return hit.model_copy(update={"cached": True})

        try:
            role = await self.store.fetch_role(user_id)
        except StoreError as e:
            logger.error(f"Error fetching user role: {e}")
            role = None

        if role:
            entry = Resolved(value=role, source=ResolutionSource.STORE)
        else:
            RESOLVER_FALLBACKS.labels(resolver="roles").inc()
            entry = Resolved(value=self.default_role, source=ResolutionSource.FALLBACK)
        self.cache.set(user_id, entry)
        return entry

    async def resolve(self, user_id: str) -> str:
        return (await self.resolve_detailed(user_id)).value
