# paceon/schemas.py
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class UserProfile(BaseModel):
    """Snapshot of a profile row; staleness is bounded by the cache TTL."""
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    avatar_url: Optional[str] = None


class AuthorizationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    authorized: bool
    is_admin: bool


class ResolutionSource(str, Enum):
    STORE = "store"        # fetched from the persistent store
    FALLBACK = "fallback"  # store missing the row or unreachable


class Resolved(BaseModel, Generic[T]):
    """A resolved value tagged with where it came from.

    ``cached`` is True when the value was served from the cache; ``source``
    still records how it was originally obtained.
    """
    model_config = ConfigDict(frozen=True)

    value: T
    source: ResolutionSource
    cached: bool = False

    @property
    def is_fallback(self) -> bool:
        return self.source is ResolutionSource.FALLBACK


class CacheSection(BaseModel):
    size: int
    keys: List[str]


class CacheStats(BaseModel):
    profiles: CacheSection
    roles: CacheSection


class RoleResponse(BaseModel):
    user_id: str
    role: str


class ErrorResponse(BaseModel):
    detail: str
    code: str | None = None
    meta: Any | None = None


ProfileMap = Dict[str, UserProfile]
