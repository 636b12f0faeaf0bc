import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
from uuid import uuid4

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from reunion.core.config import settings
from reunion.core.logging import uploads_logger

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")
ALLOWED_VIDEO_TYPES = ("video/mp4", "video/webm", "video/quicktime")
ALLOWED_TYPES = ALLOWED_IMAGE_TYPES + ALLOWED_VIDEO_TYPES

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")

@dataclass(frozen=True)
class IncomingFile:
    """An uploaded file held in memory, truncated one byte past the size limit"""
    filename: str
    content_type: str
    data: bytes
    declared_size: int = 0

    @property
    def size(self) -> int:
        return max(len(self.data), self.declared_size)

    @classmethod
    async def from_upload(cls, upload: UploadFile, max_size: int | None = None) -> "IncomingFile":
        limit = max_size or settings.MAX_UPLOAD_SIZE
        data = await upload.read(limit + 1)
        return cls(
            filename=upload.filename or "upload",
            content_type=upload.content_type or "application/octet-stream",
            data=data,
            declared_size=upload.size or 0,
        )

def validate_file(
    file: IncomingFile,
    allowed_types: Iterable[str] | None = None,
    max_size: int | None = None
) -> str | None:
    """Return an error message if the file is unacceptable, else None"""
    types = tuple(allowed_types or ALLOWED_TYPES)
    limit = max_size or settings.MAX_UPLOAD_SIZE

    if file.content_type not in types:
        return f'File type "{file.content_type}" is not allowed. Accepted: {", ".join(types)}'
    if file.size == 0:
        return "File is empty"
    if file.size > limit:
        return f"File is too large ({file.size / 1024 / 1024:.1f}MB). Max: {limit / 1024 / 1024:g}MB"
    return None

def safe_filename(name: str) -> str:
    return _UNSAFE_CHARS.sub("_", Path(name).name) or "file"

class LocalObjectStorage:
    """Object storage backed by a local directory served as static files"""

    def __init__(self, root: str | Path, public_url: str):
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")

    def object_key(self, prefix: str, filename: str) -> str:
        return f"{prefix.strip('/')}/{uuid4().hex}-{safe_filename(filename)}"

    def key_for(self, url: str) -> str | None:
        """Object key behind a public URL, or None for URLs this storage did not issue"""
        if not url.startswith(self.public_url + "/"):
            return None
        key = url[len(self.public_url) + 1:]
        if not key or ".." in Path(key).parts:
            return None
        return key

    def put(self, file: IncomingFile, prefix: str = "uploads") -> str:
        """Store the bytes and return the public URL of the object"""
        key = self.object_key(prefix, file.filename)
        target = self.root / key
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(file.data)
        uploads_logger.info(
            "Stored object",
            extra={"key": key, "content_type": file.content_type, "size": file.size}
        )
        return f"{self.public_url}/{key}"

    def delete(self, url: str) -> bool:
        """Remove the object behind a public URL; False if there was nothing to remove"""
        key = self.key_for(url)
        if key is None:
            return False
        target = self.root / key
        if not target.is_file():
            return False
        target.unlink()
        uploads_logger.info("Deleted object", extra={"key": key})
        return True

    async def save(self, file: IncomingFile, prefix: str = "uploads") -> str:
        return await run_in_threadpool(self.put, file, prefix)

    async def discard(self, urls: Iterable[str]) -> None:
        """Best-effort removal of objects written for a request that then failed"""
        for url in urls:
            try:
                await run_in_threadpool(self.delete, url)
            except OSError as e:
                uploads_logger.warning("Orphaned object left behind", extra={"url": url, "error": str(e)})

def get_storage() -> LocalObjectStorage:
    """Dependency returning the configured object storage"""
    return LocalObjectStorage(
        settings.UPLOAD_DIR,
        settings.PUBLIC_BASE_URL.rstrip("/") + settings.UPLOAD_URL_PATH
    )
