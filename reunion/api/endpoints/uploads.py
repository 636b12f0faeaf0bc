from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile

from reunion.core.exceptions import BackendError, ValidationError
from reunion.core.logging import uploads_logger
from reunion.core.policy import Action, require
from reunion.core.security import Identity
from reunion.core.storage import ALLOWED_IMAGE_TYPES, IncomingFile, LocalObjectStorage, get_storage, validate_file
from reunion.schemas.common import UploadResponse

router = APIRouter(
    tags=["Uploads"],
    responses={
        401: {"description": "Not authenticated"},
        500: {"description": "Upload failed"}
    }
)

@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload an image",
    description="""
    Store an image (jpeg, png, webp or gif, at most 5MB) and return its public URL.
    """,
    responses={
        400: {
            "description": "Missing or rejected file",
            "content": {
                "application/json": {
                    "example": {"error": "No file uploaded"}
                }
            }
        }
    }
)
async def upload_file(
    *,
    identity: Identity = Depends(require(Action.UPLOAD_FILE)),
    storage: LocalObjectStorage = Depends(get_storage),
    file: Optional[UploadFile] = File(None)
) -> UploadResponse:
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    incoming = await IncomingFile.from_upload(file)
    error = validate_file(incoming, ALLOWED_IMAGE_TYPES)
    if error:
        raise ValidationError(error)

    try:
        url = await storage.save(incoming, "uploads/profiles")
    except OSError as e:
        uploads_logger.error("Upload failed", extra={"error": str(e), "user_id": identity.id}, exc_info=True)
        raise BackendError("Upload failed")

    return UploadResponse(url=url)
