from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.cache import MEMORIES_PAGE, page_cache
from reunion.core.exceptions import BackendError, NotFoundError, ValidationError
from reunion.core.logging import memories_logger
from reunion.core.policy import Action, enforce, require
from reunion.core.security import Identity, get_identity
from reunion.core.storage import (
    ALLOWED_IMAGE_TYPES,
    ALLOWED_VIDEO_TYPES,
    IncomingFile,
    LocalObjectStorage,
    get_storage,
    validate_file,
)
from reunion.crud import memory as crud_memory
from reunion.db.database import get_db
from reunion.schemas.common import DeleteResponse
from reunion.schemas.memory import MemoryCreated, MemoryListResponse, MemoryResponse

router = APIRouter(
    prefix="/memories",
    tags=["Memories"],
    responses={
        500: {"description": "Internal server error"}
    }
)

admin_router = APIRouter(
    tags=["Memories"],
    responses={
        500: {"description": "Internal server error"}
    }
)

@router.get(
    "",
    response_model=MemoryListResponse,
    summary="List memories",
    description="Every shared photo and video, newest first."
)
async def list_memories(
    db: AsyncSession = Depends(get_db),
    identity: Optional[Identity] = Depends(require(Action.LIST_MEMORIES))
) -> MemoryListResponse:
    try:
        memories = await crud_memory.list_memories(db)
    except SQLAlchemyError as e:
        memories_logger.error("Memories fetch failed", extra={"error": str(e)}, exc_info=True)
        raise BackendError("Internal server error")

    return MemoryListResponse(memories=[MemoryResponse.model_validate(m) for m in memories])

async def _read_media(
    upload: Optional[UploadFile],
    allowed_types: tuple[str, ...]
) -> Optional[IncomingFile]:
    if upload is None or not upload.filename:
        return None
    incoming = await IncomingFile.from_upload(upload)
    error = validate_file(incoming, allowed_types)
    if error:
        raise ValidationError(error)
    return incoming

@router.post(
    "/create",
    response_model=MemoryCreated,
    summary="Share a memory",
    description="""
    Share a photo and/or a video on the memories feed.

    * `title` is required
    * `file` must be an image, `video` must be a video
    * At least one of the two must be present
    """
)
async def create_memory(
    *,
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
    identity: Identity = Depends(require(Action.CREATE_MEMORY)),
    title: str = Form(""),
    description: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None)
) -> MemoryCreated:
    if not title.strip():
        raise ValidationError("Title is required")

    # Both parts are checked before anything is written
    photo = await _read_media(file, ALLOWED_IMAGE_TYPES)
    clip = await _read_media(video, ALLOWED_VIDEO_TYPES)
    if photo is None and clip is None:
        raise ValidationError("Photo or video is required")

    photo_url = video_url = None
    stored: list[str] = []
    try:
        if photo:
            photo_url = await storage.save(photo, "uploads/memories")
            stored.append(photo_url)
        if clip:
            video_url = await storage.save(clip, "uploads/videos")
            stored.append(video_url)
    except OSError as e:
        memories_logger.error("Media storage failed", extra={"error": str(e)}, exc_info=True)
        await storage.discard(stored)
        raise BackendError("Failed to create memory")

    try:
        memory = await crud_memory.create_memory(
            db,
            title=title.strip(),
            description=description or None,
            photo_url=photo_url,
            video_url=video_url,
            uploaded_by=identity.id
        )
    except SQLAlchemyError as e:
        memories_logger.error("Memory creation failed", extra={"error": str(e)}, exc_info=True)
        await storage.discard(stored)
        raise BackendError("Failed to create memory")

    return MemoryCreated(message="Memory shared successfully", id=memory.id)

@router.delete(
    "/{memory_id}",
    response_model=DeleteResponse,
    summary="Delete memory",
    description="""
    Permanently delete a memory.

    Allowed for the member who uploaded it and for admins.
    """,
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Neither the uploader nor an admin"},
        404: {"description": "Memory not found"}
    }
)
async def delete_memory(
    *,
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
    memory_id: str,
    identity: Optional[Identity] = Depends(get_identity)
) -> DeleteResponse:
    """
    Delete a memory.

    The session is checked before the lookup so anonymous callers get 401
    whether or not the memory exists; ownership is checked once it is loaded.
    """
    enforce(identity, Action.DELETE_MEMORY)

    try:
        memory = await crud_memory.get_memory(db, memory_id)
        if memory is None:
            raise NotFoundError("Memory not found")

        enforce(identity, Action.DELETE_MEMORY, resource=memory)
        await crud_memory.delete_memory(db, memory_id)
    except SQLAlchemyError as e:
        memories_logger.error("Memory deletion failed", extra={"error": str(e), "memory_id": memory_id}, exc_info=True)
        raise BackendError("Internal server error")

    await storage.discard(memory.media_urls)
    if identity.is_admin:
        page_cache.invalidate(MEMORIES_PAGE)
    memories_logger.info("Memory deleted", extra={"memory_id": memory_id, "user_id": identity.id})
    return DeleteResponse(message="Memory deleted")

@admin_router.delete(
    "/admin/memories/{memory_id}",
    response_model=DeleteResponse,
    summary="Remove memory (admin)",
    description="""
    Permanently delete any memory. Admin only.

    Deleting an id that does not exist succeeds without changing anything.
    The memories page cache is invalidated afterwards.
    """,
    responses={
        403: {"description": "Admin privileges required"}
    }
)
async def admin_delete_memory(
    *,
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
    memory_id: str,
    identity: Identity = Depends(require(Action.ADMIN_DELETE_MEMORY))
) -> DeleteResponse:
    if not memory_id.strip():
        raise ValidationError("Memory ID required")

    try:
        memory = await crud_memory.get_memory(db, memory_id)
        if memory is not None:
            await crud_memory.delete_memory(db, memory_id)
    except SQLAlchemyError as e:
        memories_logger.error("Memory deletion failed", extra={"error": str(e), "memory_id": memory_id}, exc_info=True)
        raise BackendError("Internal server error")

    if memory is not None:
        await storage.discard(memory.media_urls)
    page_cache.invalidate(MEMORIES_PAGE)
    memories_logger.info("Memory deleted", extra={"memory_id": memory_id, "user_id": identity.id})
    return DeleteResponse(message="Memory permanently deleted")
