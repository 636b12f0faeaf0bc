from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.cache import EVENTS_PAGE, page_cache
from reunion.core.exceptions import BackendError, ValidationError
from reunion.core.logging import events_logger
from reunion.core.policy import Action, require
from reunion.core.security import Identity
from reunion.crud import event as crud_event
from reunion.crud import hotel as crud_hotel
from reunion.crud import profile as crud_profile
from reunion.db.database import get_db
from reunion.schemas.common import DeleteResponse
from reunion.schemas.event import EventCreate, EventCreated, EventListResponse, EventResponse
from reunion.schemas.profile import RSVPResponse, RSVPSubmit

router = APIRouter(
    tags=["Events"],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Not enough permissions"},
        500: {"description": "Internal server error"}
    }
)

@router.get(
    "/events",
    response_model=EventListResponse,
    summary="List events",
    description="All reunion events, soonest first. Served from the page cache when fresh."
)
async def list_events(
    db: AsyncSession = Depends(get_db),
    identity: Optional[Identity] = Depends(require(Action.LIST_EVENTS))
) -> EventListResponse:
    cached = page_cache.get(EVENTS_PAGE)
    if cached is not None:
        return cached

    try:
        events = await crud_event.list_events(db)
    except SQLAlchemyError as e:
        events_logger.error("Events fetch failed", extra={"error": str(e)}, exc_info=True)
        raise BackendError("Failed to fetch events")

    payload = EventListResponse(events=[EventResponse.model_validate(e) for e in events])
    page_cache.set(EVENTS_PAGE, payload)
    return payload

@router.post(
    "/events",
    response_model=EventCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create event",
    description="""
    Create a reunion event. Admin only.

    Required fields are `title`, `eventStartDate` and `venueName`.
    """,
    responses={
        201: {
            "description": "Event created",
            "content": {
                "application/json": {
                    "example": {
                        "event": {
                            "id": "0c6f...",
                            "title": "Silver Jubilee Reunion",
                            "eventStartDate": "2025-12-20T10:00:00Z",
                            "venueName": "Main Auditorium"
                        }
                    }
                }
            }
        }
    }
)
async def create_event(
    *,
    db: AsyncSession = Depends(get_db),
    event_in: EventCreate,
    identity: Identity = Depends(require(Action.CREATE_EVENT))
) -> EventCreated:
    try:
        event = await crud_event.create_event(db, event_in)
    except SQLAlchemyError as e:
        events_logger.error("Event creation failed", extra={"error": str(e)}, exc_info=True)
        raise BackendError("Failed to create event")

    page_cache.invalidate(EVENTS_PAGE)
    events_logger.info("Event created", extra={"event_id": event.id, "user_id": identity.id})
    return EventCreated(event=EventResponse.model_validate(event))

@router.post(
    "/events/{event_id}/rsvp",
    response_model=RSVPResponse,
    summary="Submit RSVP",
    description="""
    Record the caller's attendance plans on their alumni profile.

    * `adults` and `kids` default to 0 and must not be negative
    * `hotelId`, when given, must name an existing hotel
    * Submitting the same payload twice leaves the same values (no summing)
    """,
    responses={
        200: {
            "description": "RSVP stored",
            "content": {
                "application/json": {
                    "example": {"message": "RSVP updated successfully"}
                }
            }
        }
    }
)
async def submit_rsvp(
    *,
    db: AsyncSession = Depends(get_db),
    event_id: str,
    rsvp_in: RSVPSubmit,
    identity: Identity = Depends(require(Action.SUBMIT_RSVP))
) -> RSVPResponse:
    """
    Submit an RSVP.

    The profile is matched by the session email. The event id is accepted
    for routing only; RSVP state lives on the profile.
    """
    try:
        if rsvp_in.hotel_id and await crud_hotel.get_hotel(db, rsvp_in.hotel_id) is None:
            raise ValidationError("Selected hotel does not exist")

        updated = await crud_profile.update_rsvp_by_email(db, email=identity.email, rsvp_in=rsvp_in)
    except SQLAlchemyError as e:
        events_logger.error("RSVP failed", extra={"error": str(e), "event_id": event_id}, exc_info=True)
        raise BackendError("Internal server error")

    if not updated:
        events_logger.warning(
            "RSVP matched no profile",
            extra={"user_id": identity.id, "event_id": event_id}
        )
    return RSVPResponse(message="RSVP updated successfully")

@router.delete(
    "/admin/events/{event_id}",
    response_model=DeleteResponse,
    summary="Delete event",
    description="""
    Permanently delete an event. Admin only.

    Deleting an id that does not exist succeeds without changing anything.
    The events page cache is invalidated afterwards.
    """,
    responses={
        200: {
            "description": "Event deleted",
            "content": {
                "application/json": {
                    "example": {"success": True, "message": "Event permanently deleted"}
                }
            }
        }
    }
)
async def delete_event(
    *,
    db: AsyncSession = Depends(get_db),
    event_id: str,
    identity: Identity = Depends(require(Action.DELETE_EVENT))
) -> DeleteResponse:
    if not event_id.strip():
        raise ValidationError("Event ID required")

    try:
        await crud_event.delete_event(db, event_id)
    except SQLAlchemyError as e:
        events_logger.error("Event deletion failed", extra={"error": str(e), "event_id": event_id}, exc_info=True)
        raise BackendError("Internal server error")

    page_cache.invalidate(EVENTS_PAGE)
    events_logger.info("Event deleted", extra={"event_id": event_id, "user_id": identity.id})
    return DeleteResponse(message="Event permanently deleted")
