from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.exceptions import BackendError
from reunion.core.logging import alumni_logger
from reunion.core.policy import Action, require
from reunion.core.security import Identity
from reunion.crud import profile as crud_profile
from reunion.db.database import get_db
from reunion.schemas.profile import AlumniEntry, AlumniListResponse

MAX_PAGE_SIZE = 50

router = APIRouter(
    prefix="/alumni",
    tags=["Alumni"],
    responses={
        401: {"description": "Not authenticated"},
        500: {"description": "Failed to fetch alumni"}
    }
)

@router.get(
    "",
    response_model=AlumniListResponse,
    summary="Alumni directory",
    description="""
    Profiles ordered by name, one page at a time.

    * `search` matches name, city or workplace
    * `limit` defaults to 20 and is capped at 50
    """
)
async def list_alumni(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require(Action.LIST_ALUMNI)),
    search: Optional[str] = Query(None, max_length=100),
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0)
) -> AlumniListResponse:
    try:
        profiles = await crud_profile.list_alumni(
            db,
            search=search.strip() if search else None,
            limit=min(limit, MAX_PAGE_SIZE),
            offset=offset
        )
    except SQLAlchemyError as e:
        alumni_logger.error("Alumni fetch failed", extra={"error": str(e), "user_id": identity.id}, exc_info=True)
        raise BackendError("Failed to fetch alumni")

    return AlumniListResponse(data=[AlumniEntry.model_validate(p) for p in profiles])
