# paceon/routes/profile_routes.py
from typing import Dict, List

from fastapi import APIRouter, Depends, Query

from paceon.auth.auth_utils import get_current_user_id, get_user_cache
from paceon.schemas import AuthorizationResult, RoleResponse, UserProfile
from paceon.services.user_cache import UserCacheService

router = APIRouter()


@router.get("/profiles", response_model=Dict[str, UserProfile])
async def get_profiles(
    ids: List[str] = Query(default=[]),
    user_id: str = Depends(get_current_user_id),
    user_cache: UserCacheService = Depends(get_user_cache),
):
    """
    Resolves profiles for the given user ids (repeat ``ids`` for several).
    Unknown ids come back as placeholder profiles rather than errors.
    """
    return await user_cache.resolve_profiles(ids)


@router.get("/profiles/me/role", response_model=RoleResponse)
async def get_my_role(
    user_id: str = Depends(get_current_user_id),
    user_cache: UserCacheService = Depends(get_user_cache),
):
    role = await user_cache.resolve_role(user_id)
    return RoleResponse(user_id=user_id, role=role)


@router.get("/authorization/{owner_id}", response_model=AuthorizationResult)
async def check_access(
    owner_id: str,
    user_id: str = Depends(get_current_user_id),
    user_cache: UserCacheService = Depends(get_user_cache),
):
    """Whether the caller may modify a resource owned by ``owner_id``."""
    return await user_cache.check_authorization(user_id, owner_id)
