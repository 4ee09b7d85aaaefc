# paceon/routes/cache_routes.py
from fastapi import APIRouter, Depends

from paceon.auth.auth_utils import ensure_owner_or_admin, get_current_user_id, get_user_cache, require_admin
from paceon.schemas import CacheStats
from paceon.services.user_cache import UserCacheService

router = APIRouter()


@router.get("/stats", response_model=CacheStats)
async def cache_stats(
    admin_id: str = Depends(require_admin),
    user_cache: UserCacheService = Depends(get_user_cache),
):
    return user_cache.stats()


@router.delete("/users/{user_id}")
async def invalidate_user(
    user_id: str,
    requester_id: str = Depends(get_current_user_id),
    user_cache: UserCacheService = Depends(get_user_cache),
):
    """Drops a user's cached profile and role. Allowed for the user themself or an admin."""
    await ensure_owner_or_admin(user_cache, requester_id, user_id)
    user_cache.invalidate_user(user_id)
    return {"message": f"Cache invalidated for user {user_id}"}


@router.delete("")
async def clear_caches(
    admin_id: str = Depends(require_admin),
    user_cache: UserCacheService = Depends(get_user_cache),
):
    user_cache.clear_all()
    return {"message": "All caches cleared"}
