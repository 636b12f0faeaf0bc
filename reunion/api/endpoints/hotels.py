from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.cache import ACCOMMODATION_PAGE, page_cache
from reunion.core.exceptions import BackendError, ValidationError
from reunion.core.logging import hotels_logger
from reunion.core.policy import Action, require
from reunion.core.security import Identity
from reunion.crud import hotel as crud_hotel
from reunion.db.database import get_db
from reunion.schemas.common import DeleteResponse
from reunion.schemas.hotel import HotelCreate, HotelCreated, HotelListResponse, HotelSummary

router = APIRouter(
    tags=["Hotels"],
    responses={
        500: {"description": "Internal server error"}
    }
)

@router.post(
    "/hotels/create",
    response_model=HotelCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Suggest a hotel",
    description="""
    Add a hotel to the accommodation list.

    `name` and `websiteUrl` are required. No session is needed; when one is
    present the caller is recorded as the hotel's creator.
    """,
    responses={
        400: {
            "description": "Missing required field",
            "content": {
                "application/json": {
                    "example": {"error": "name is required"}
                }
            }
        }
    }
)
async def create_hotel(
    *,
    db: AsyncSession = Depends(get_db),
    hotel_in: HotelCreate,
    identity: Optional[Identity] = Depends(require(Action.CREATE_HOTEL))
) -> HotelCreated:
    try:
        hotel = await crud_hotel.create_hotel(db, hotel_in, creator_id=identity.id if identity else None)
    except SQLAlchemyError as e:
        hotels_logger.error("Hotel creation failed", extra={"error": str(e)}, exc_info=True)
        raise BackendError("Failed to create hotel")

    page_cache.invalidate(ACCOMMODATION_PAGE)
    return HotelCreated(id=hotel.id)

@router.get(
    "/hotels/public",
    response_model=HotelListResponse,
    summary="List hotels",
    description="Id and name of every hotel, ascending by name.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"data": [{"id": "a1...", "name": "Grand Palace"}]}
                }
            }
        }
    }
)
async def list_hotels(
    db: AsyncSession = Depends(get_db),
    identity: Optional[Identity] = Depends(require(Action.LIST_HOTELS))
) -> HotelListResponse:
    cached = page_cache.get(ACCOMMODATION_PAGE)
    if cached is not None:
        return cached

    try:
        hotels = await crud_hotel.list_hotels(db)
    except SQLAlchemyError as e:
        hotels_logger.error("Hotel fetch failed", extra={"error": str(e)}, exc_info=True)
        raise BackendError("Failed to fetch hotels")

    payload = HotelListResponse(data=[HotelSummary(id=h.id, name=h.hotel_name) for h in hotels])
    page_cache.set(ACCOMMODATION_PAGE, payload)
    return payload

@router.delete(
    "/admin/hotels/{hotel_id}",
    response_model=DeleteResponse,
    summary="Delete hotel",
    description="""
    Permanently delete a hotel. Admin only.

    Profiles that selected the hotel have their selection cleared. Deleting an
    id that does not exist succeeds without changing anything.
    """
)
async def delete_hotel(
    *,
    db: AsyncSession = Depends(get_db),
    hotel_id: str,
    identity: Identity = Depends(require(Action.DELETE_HOTEL))
) -> DeleteResponse:
    if not hotel_id.strip():
        raise ValidationError("Hotel ID required")

    try:
        await crud_hotel.delete_hotel(db, hotel_id)
    except SQLAlchemyError as e:
        hotels_logger.error("Hotel deletion failed", extra={"error": str(e), "hotel_id": hotel_id}, exc_info=True)
        raise BackendError("Internal server error")

    page_cache.invalidate(ACCOMMODATION_PAGE)
    hotels_logger.info("Hotel deleted", extra={"hotel_id": hotel_id, "user_id": identity.id})
    return DeleteResponse(message="Hotel permanently deleted")
