# paceon/auth/auth_utils.py
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from paceon.core.settings import Settings
from paceon.schemas import AuthorizationResult
from paceon.services.user_cache import UserCacheService

ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str, secret: str, audience: Optional[str] = "authenticated") -> Optional[dict]:
    """Decodes a Supabase access token. Returns the payload or None if it is invalid or expired."""
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM], audience=audience)
    except JWTError:
        return None


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_cache(request: Request) -> UserCacheService:
    return request.app.state.user_cache


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Dependency returning the authenticated user's id (the token's ``sub`` claim).
    Raises 401 if the bearer token is missing, invalid or expired.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials, settings.supabase_jwt_secret, settings.supabase_jwt_audience)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception
    return str(user_id)


async def ensure_owner_or_admin(user_cache: UserCacheService, requester_id: str, owner_id: str) -> AuthorizationResult:
    """Raises 403 unless the requester owns the resource or is an admin."""
    result = await user_cache.check_authorization(requester_id, owner_id)
    if not result.authorized:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this resource",
        )
    return result


async def require_admin(
    user_id: str = Depends(get_current_user_id),
    user_cache: UserCacheService = Depends(get_user_cache),
    settings: Settings = Depends(get_settings),
) -> str:
    role = await user_cache.resolve_role(user_id)
    if role != settings.admin_role:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user_id
