from contextlib import asynccontextmanager
from pathlib import Path
import logging

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from reunion.core.config import settings
from reunion.api.api import api_router
from reunion.core.cache import page_cache
from reunion.core.error_handler import setup_error_handlers
from reunion.core.logging import RequestLoggingMiddleware, setup_logging
from reunion.core.metrics import setup_metrics
from reunion.core.middleware import ContentLengthLimitMiddleware, SecurityHeadersMiddleware
from reunion.db.database import dispose_db, init_db

if not settings.TESTING:
    setup_logging()
logger = logging.getLogger(__name__)

class HealthResponse(BaseModel):
    status: str

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle startup and shutdown events.
    """
    logger.info("Starting up application...")
    await init_db()
    page_cache.start_cleanup()

    yield

    logger.info("Shutting down application...")
    page_cache.stop_cleanup()
    await dispose_db()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Alumni Reunion API.

    ## Features

    * **Accounts**: registration, sign-in, session cookie or bearer token
    * **Events**: event listing and RSVPs stored on the alumni profile
    * **Accommodation**: hotel suggestions and the public hotel list
    * **Memories**: photo and video feed
    * **Locations**: country, state and city lookups

    ## Roles

    * `user` and `alumni` can RSVP, upload and manage their own memories
    * `admin` can additionally create and delete events, delete hotels and
      delete any memory

    ## Error Handling

    Every error body is `{"error": "<message>"}`:
    * 400: Missing or malformed input
    * 401: Missing or invalid session
    * 403: Signed in but not allowed
    * 404: Resource doesn't exist
    * 409: Email already registered
    * 500: Server-side error
    """,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs" if settings.SHOW_DOCS else None,
    redoc_url=f"{settings.API_PREFIX}/redoc" if settings.SHOW_DOCS else None,
    lifespan=lifespan
)

# Middleware added last runs outermost
setup_metrics(app)

if settings.SECURITY_HEADERS:
    app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(ContentLengthLimitMiddleware)

# Escaped errors become a logged 500 here
app.add_middleware(RequestLoggingMiddleware)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

setup_error_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)

upload_root = Path(settings.UPLOAD_DIR)
upload_root.mkdir(parents=True, exist_ok=True)
app.mount(settings.UPLOAD_URL_PATH, StaticFiles(directory=upload_root), name="files")

@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check"
)
async def health() -> HealthResponse:
    return HealthResponse(status="ok")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("reunion.main:app", host="0.0.0.0", port=settings.PORT)
