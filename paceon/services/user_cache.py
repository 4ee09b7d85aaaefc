"""Per-process user cache: profile and role caches plus the resolvers on top.

One instance is built at startup and shared by every request handler; nothing
here is a module-level singleton.
"""
import logging
import time
from typing import Callable, Dict, Iterable

from paceon.core.cache import TTLCache
from paceon.core.maintenance import CacheSweeper
from paceon.core.settings import Settings
from paceon.database.store import ProfileStore
from paceon.schemas import AuthorizationResult, CacheSection, CacheStats, Resolved, UserProfile
from paceon.services.authorization import Authorizer
from paceon.services.profiles import ProfileResolver
from paceon.services.roles import RoleResolver

logger = logging.getLogger(__name__)


class UserCacheService:
    def __init__(
        self,
        store: ProfileStore,
        ttl_seconds: float = 300,
        sweep_interval_seconds: float = 60,
        max_items: int | None = None,
        default_role: str = "user",
        admin_role: str = "admin",
        placeholder_name: str = "Unknown User",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.profile_cache: TTLCache[Resolved] = TTLCache(ttl_seconds, max_items, name="profiles", clock=clock)
        self.role_cache: TTLCache[Resolved] = TTLCache(ttl_seconds, max_items, name="roles", clock=clock)
        self.profiles = ProfileResolver(self.profile_cache, store, placeholder_name=placeholder_name)
        self.roles = RoleResolver(self.role_cache, store, default_role=default_role)
        self.authorizer = Authorizer(self.roles, admin_role=admin_role)
        self.sweeper = CacheSweeper([self.profile_cache, self.role_cache], interval_seconds=sweep_interval_seconds)

    @classmethod
    def from_settings(cls, settings: Settings, store: ProfileStore, **kwargs) -> "UserCacheService":
        return cls(
            store,
            ttl_seconds=settings.cache_ttl_seconds,
            sweep_interval_seconds=settings.cache_sweep_interval_seconds,
            max_items=settings.cache_max_items,
            default_role=settings.default_role,
            admin_role=settings.admin_role,
            placeholder_name=settings.placeholder_display_name,
            **kwargs,
        )

    async def resolve_profiles(self, user_ids: Iterable[str]) -> Dict[str, UserProfile]:
        return await self.profiles.resolve(user_ids)

    async def resolve_role(self, user_id: str) -> str:
        return await self.roles.resolve(user_id)

    async def check_authorization(self, requester_id: str, owner_id: str) -> AuthorizationResult:
        return await self.authorizer.check(requester_id, owner_id)

    def invalidate_user(self, user_id: str) -> None:
        """Forget a user's profile and role, e.g. after a profile edit."""
        self.profile_cache.invalidate(user_id)
        self.role_cache.invalidate(user_id)
        logger.info(f"Cache invalidated for user: {user_id}")

    def clear_all(self) -> None:
        self.profile_cache.clear()
        self.role_cache.clear()
        logger.info("All caches cleared")

    def stats(self) -> CacheStats:
        """Size and keys of both caches. Expired entries are swept first so only live keys are reported."""
        self.sweeper.sweep_once()
        profile_keys = self.profile_cache.keys()
        role_keys = self.role_cache.keys()
        return CacheStats(
            profiles=CacheSection(size=len(profile_keys), keys=profile_keys),
            roles=CacheSection(size=len(role_keys), keys=role_keys),
        )
