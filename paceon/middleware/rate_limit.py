from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from paceon.schemas import ErrorResponse


def build_limiter(default_limit: str) -> Limiter:
    return Limiter(key_func=get_remote_address, default_limits=[default_limit])


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    body = ErrorResponse(detail="Rate limit exceeded", code="rate_limited", meta={"limit": str(exc.detail)})
    return JSONResponse(status_code=429, content=body.model_dump())
