import logging
from datetime import datetime, UTC
from typing import Any, Dict
from uuid import uuid4
from pythonjsonlogger.jsonlogger import JsonFormatter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from reunion.core.config import settings
import time
import traceback

LOGGER_NAMES = [
    "api.request",
    "api.auth",
    "api.alumni",
    "api.events",
    "api.hotels",
    "api.memories",
    "api.uploads",
    "api.locations",
    "db",
    "cache",
    "uvicorn"
]

class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter for logs."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(UTC).isoformat()
        log_record["level"] = record.levelname
        log_record["name"] = record.name

        # Code location
        log_record["function"] = record.funcName
        log_record["module"] = record.module
        log_record["line"] = record.lineno

        log_record["environment"] = settings.ENVIRONMENT

        # Request context, when present
        if hasattr(record, "request_id"):
            log_record["request_id"] = record.request_id
        if hasattr(record, "user_id"):
            log_record["user_id"] = record.user_id
        if hasattr(record, "duration"):
            log_record["duration"] = record.duration

def _configure(level: str | int, propagate: bool, log_file: str | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(CustomJsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in handlers:
        root_logger.addHandler(handler)

    for logger_name in LOGGER_NAMES:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = propagate
        if not propagate:
            for handler in handlers:
                logger.addHandler(handler)

def setup_logging() -> None:
    """Configure logging for the application."""
    _configure(settings.LOG_LEVEL.upper(), propagate=False, log_file=settings.LOG_FILE_PATH)

def setup_test_logging() -> None:
    """Configure logging for tests with propagation enabled."""
    _configure(logging.INFO, propagate=True)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request and turn escaped exceptions into a generic 500."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid4())
        start_time = time.time()
        request.state.request_id = request_id

        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "duration": None
        }

        request_logger.info("Incoming request", extra=extra)

        try:
            response = await call_next(request)
        except Exception as e:
            extra["duration"] = time.time() - start_time
            extra["error"] = str(e)
            extra["error_type"] = e.__class__.__name__
            extra["traceback"] = traceback.format_exc()
            request_logger.error(f"{e.__class__.__name__} occurred", extra=extra)
            response = JSONResponse(
                status_code=500,
                content={"error": "Internal server error"}
            )
            response.headers["X-Request-ID"] = request_id
            return response

        extra["duration"] = time.time() - start_time
        extra["status_code"] = response.status_code
        request_logger.info("Request completed", extra=extra)

        response.headers["X-Request-ID"] = request_id
        return response

# Named loggers
request_logger = logging.getLogger("api.request")
auth_logger = logging.getLogger("api.auth")
alumni_logger = logging.getLogger("api.alumni")
events_logger = logging.getLogger("api.events")
hotels_logger = logging.getLogger("api.hotels")
memories_logger = logging.getLogger("api.memories")
uploads_logger = logging.getLogger("api.uploads")
locations_logger = logging.getLogger("api.locations")
db_logger = logging.getLogger("db")
cache_logger = logging.getLogger("cache")
