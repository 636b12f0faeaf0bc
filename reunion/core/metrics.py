from prometheus_client import Counter, Histogram, Gauge, Info, REGISTRY, generate_latest, CONTENT_TYPE_LATEST
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import time
from reunion.core.config import settings

# System Info
system_info = Info("app_info", "Application information")
system_info.info({
    "version": settings.VERSION,
    "environment": settings.ENVIRONMENT
})

HTTP_REQUESTS_TOTAL = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

HTTP_REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path']
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    'http_requests_in_progress',
    'Number of HTTP requests in progress',
    ['method']
)

# Database Metrics
DB_QUERIES_TOTAL = Counter(
    'db_queries_total',
    'Total database statements',
    ['operation', 'entity']
)

# Authentication Metrics
AUTH_ATTEMPTS_TOTAL = Counter(
    'auth_attempts_total',
    'Total authentication attempts',
    ['method', 'success']
)

# Page cache
PAGE_CACHE_INVALIDATIONS_TOTAL = Counter(
    'page_cache_invalidations_total',
    'Total page cache invalidation signals',
    ['path']
)

def _path_label(request: Request) -> str:
    # Label by route template so ids don't explode cardinality
    route = request.scope.get("route")
    template = getattr(route, "path_format", None)
    if not template:
        return request.url.path
    # Templates of nested routers can be relative to their mount prefix
    path = request.url.path
    for prefix in (request.scope.get("root_path", ""), settings.API_PREFIX):
        prefix = prefix.rstrip("/")
        if prefix and path.startswith(prefix + "/") and not template.startswith(prefix + "/"):
            template = prefix + template
    return template

class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware for collecting request metrics."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        HTTP_REQUESTS_IN_PROGRESS.labels(method=request.method).inc()

        try:
            response = await call_next(request)
            HTTP_REQUEST_DURATION.labels(
                method=request.method,
                path=_path_label(request)
            ).observe(time.time() - start_time)
            HTTP_REQUESTS_TOTAL.labels(
                method=request.method,
                path=_path_label(request),
                status=str(response.status_code)
            ).inc()
            return response
        except Exception:
            HTTP_REQUESTS_TOTAL.labels(
                method=request.method,
                path=_path_label(request),
                status="500"
            ).inc()
            raise
        finally:
            HTTP_REQUESTS_IN_PROGRESS.labels(method=request.method).dec()

def record_db_operation(operation: str, entity: str) -> None:
    DB_QUERIES_TOTAL.labels(operation=operation, entity=entity).inc()

def record_auth_attempt(success: bool, method: str) -> None:
    AUTH_ATTEMPTS_TOTAL.labels(method=method, success=str(success)).inc()

def record_cache_invalidation(path: str) -> None:
    PAGE_CACHE_INVALIDATIONS_TOTAL.labels(path=path).inc()

def setup_metrics(app: FastAPI) -> None:
    """Configure metrics collection for the application."""
    app.add_middleware(MetricsMiddleware)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        return Response(
            generate_latest(REGISTRY),
            media_type=CONTENT_TYPE_LATEST
        )
