"""Application entrypoint.

Centralized settings + structured logging + the cache sweeper owned by the app lifespan.
"""
import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.routing import Match

from paceon.core.metrics import REQUEST_COUNT, REQUEST_LATENCY
from paceon.core.settings import Settings, settings as default_settings
from paceon.database.db import get_supabase
from paceon.database.store import ProfileStore, SupabaseProfileStore
from paceon.middleware.rate_limit import build_limiter, rate_limit_exceeded_handler
from paceon.routes import cache_routes, profile_routes
from paceon.services.user_cache import UserCacheService


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "level": record.levelname,
            "ts": record.created,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def configure_logging(json_logs: bool = True):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if json_logs:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(JsonFormatter())


def _default_store(settings: Settings) -> ProfileStore:
    return SupabaseProfileStore(
        get_supabase(settings.supabase_url, settings.supabase_service_role_key),
        table=settings.profiles_table, placeholder_name=settings.placeholder_display_name)


def _route_template(request: Request) -> str:
    """Route path template (``/api/authorization/{owner_id}``) for metric labels."""
    route = request.scope.get("route")
    if route is None:
        for candidate in request.app.router.routes:
            match, _ = candidate.matches(request.scope)
            if match == Match.FULL:
                route = candidate
                break
    return getattr(route, "path", None) or "unmatched"


def create_app(settings: Optional[Settings] = None, store: Optional[ProfileStore] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        user_cache = UserCacheService.from_settings(settings, store or _default_store(settings))
        app.state.user_cache = user_cache
        user_cache.sweeper.start()
        try:
            yield
        finally:
            await user_cache.sweeper.stop()
            user_cache.clear_all()

    app = FastAPI(title=settings.app_name, version="v1", lifespan=lifespan, openapi_tags=[
        {"name": "profiles", "description": "Cached profile, role and authorization lookups"},
        {"name": "cache", "description": "Cache inspection and invalidation"},
    ])
    app.state.settings = settings

    # Attach rate limiting
    app.state.limiter = build_limiter(settings.rate_limit_default)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        method = request.method
        started = time.perf_counter()
        response = await call_next(request)
        path = _route_template(request)
        REQUEST_LATENCY.labels(path=path).observe(time.perf_counter() - started)
        REQUEST_COUNT.labels(method=method, path=path, status=response.status_code).inc()
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in settings.cors_allow_origins.split(',')],
        allow_credentials=True,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(profile_routes.router, prefix="/api", tags=["profiles"])
    app.include_router(cache_routes.router, prefix="/api/cache", tags=["cache"])

    @app.get("/")
    async def root():
        """Root endpoint for the API."""
        return {"message": f"{settings.app_name} is running", "version": app.version}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


def build_app() -> FastAPI:
    """Entrypoint for ``uvicorn paceon.main:build_app --factory``."""
    configure_logging(default_settings.log_json)
    return create_app()
