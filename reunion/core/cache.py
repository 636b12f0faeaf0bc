from typing import Any, Optional, Dict
import time
import asyncio

from reunion.core.config import settings
from reunion.core.logging import cache_logger
from reunion.core.metrics import record_cache_invalidation

EVENTS_PAGE = "/events"
ACCOMMODATION_PAGE = "/accommodation"
MEMORIES_PAGE = "/memories"

class PageCache:
    """In-memory cache of rendered list pages, keyed by page path."""
    def __init__(self, default_ttl: int = 300):
        self._pages: Dict[str, Dict[str, Any]] = {}
        self._default_ttl = default_ttl
        self._cleanup_task: Optional[asyncio.Task] = None

    async def _cleanup_expired(self):
        """Periodically drop expired pages"""
        while True:
            current_time = time.time()
            for path in list(self._pages.keys()):
                entry = self._pages.get(path)
                if entry and entry["expires_at"] <= current_time:
                    self._pages.pop(path, None)
            await asyncio.sleep(60)

    def start_cleanup(self):
        if not self._cleanup_task:
            self._cleanup_task = asyncio.create_task(self._cleanup_expired())

    def stop_cleanup(self):
        if self._cleanup_task:
            self._cleanup_task.cancel()
            self._cleanup_task = None

    def get(self, path: str) -> Optional[Any]:
        """Return the cached payload for a page, or None if absent or stale"""
        entry = self._pages.get(path)
        if entry is None:
            return None
        if entry["expires_at"] <= time.time():
            self._pages.pop(path, None)
            return None
        return entry["value"]

    def set(self, path: str, value: Any, ttl: Optional[int] = None) -> None:
        self._pages[path] = {
            "value": value,
            "expires_at": time.time() + (ttl or self._default_ttl)
        }

    def invalidate(self, path: str) -> None:
        """Mark a page stale so the next read goes to the store"""
        self._pages.pop(path, None)
        record_cache_invalidation(path)
        cache_logger.info("Page invalidated", extra={"path": path})

    def clear(self) -> None:
        self._pages.clear()

# Global page cache instance
page_cache = PageCache(default_ttl=settings.CACHE_TTL_MINUTES * 60)
