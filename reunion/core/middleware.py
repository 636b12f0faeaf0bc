from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from reunion.core.config import settings

BASE_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

def security_headers_for(path: str) -> dict[str, str]:
    """Headers stamped on every response.

    HSTS is only sent in production. API responses are marked no-store;
    uploaded files are left cacheable.
    """
    headers = dict(BASE_SECURITY_HEADERS)
    if settings.ENVIRONMENT.lower() == "production":
        headers["Strict-Transport-Security"] = f"max-age={settings.HSTS_MAX_AGE}; includeSubDomains"
    if path.startswith(settings.API_PREFIX):
        headers["Cache-Control"] = "no-store"
    return headers

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(security_headers_for(request.url.path))
        return response

class ContentLengthLimitMiddleware(BaseHTTPMiddleware):
    """Reject bodies declared larger than MAX_CONTENT_LENGTH before they are read."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > settings.MAX_CONTENT_LENGTH:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"error": "Request too large"}
            )
        return await call_next(request)
