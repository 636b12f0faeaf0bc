from datetime import datetime
from pydantic import Field, model_validator
from .base import BaseSchema

class EventCreate(BaseSchema):
    """Schema for creating an event"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    event_start_date: datetime
    event_end_date: datetime | None = None
    rsvp_deadline: datetime | None = None
    venue_name: str = Field(..., min_length=1, max_length=200)
    venue_address: str | None = Field(None, max_length=500)
    banner_image_url: str | None = Field(None, max_length=500)

    @model_validator(mode='after')
    def validate_dates(self):
        if self.event_end_date and self.event_end_date < self.event_start_date:
            raise ValueError("eventEndDate must not be before eventStartDate")
        return self

class EventResponse(BaseSchema):
    id: str
    title: str
    description: str | None = None
    event_start_date: datetime
    event_end_date: datetime | None = None
    rsvp_deadline: datetime | None = None
    venue_name: str
    venue_address: str | None = None
    banner_image_url: str | None = None
    created_at: datetime | None = None

class EventListResponse(BaseSchema):
    events: list[EventResponse]

class EventCreated(BaseSchema):
    event: EventResponse
