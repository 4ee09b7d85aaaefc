"""Prometheus collectors shared by the HTTP layer and the user caches."""
from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter("http_requests_total", "Total HTTP requests", ["method", "path", "status"])
REQUEST_LATENCY = Histogram("http_request_duration_seconds", "Request latency", ["path"])

CACHE_LOOKUPS = Counter("paceon_cache_lookups_total", "Cache lookups", ["cache", "result"])
CACHE_EVICTIONS = Counter("paceon_cache_evictions_total", "Cache entries removed", ["cache", "reason"])
RESOLVER_FALLBACKS = Counter("paceon_resolver_fallbacks_total", "Fallback values served", ["resolver"])
