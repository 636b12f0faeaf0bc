from datetime import datetime
from pydantic import Field, field_validator
from .base import BaseSchema
from .user import UserInfo

class AlumniProfileResponse(BaseSchema):
    id: str
    user_id: str | None = None
    full_name: str
    email: str
    profile_photo_url: str | None = None
    current_designation: str | None = None
    workplace: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    rsvp_adults: int = 0
    rsvp_kids: int = 0
    hotel_selection_id: str | None = None
    special_reqs: str | None = None
    updated_at: datetime | None = None

class OwnProfile(BaseSchema):
    user: UserInfo
    profile: AlumniProfileResponse | None = None

class OwnProfileResponse(BaseSchema):
    data: OwnProfile

MAX_PARTY_SIZE = 100

class RSVPSubmit(BaseSchema):
    """RSVP payload; absent counts default to zero"""
    adults: int | None = Field(default=0, ge=0, le=MAX_PARTY_SIZE)
    kids: int | None = Field(default=0, ge=0, le=MAX_PARTY_SIZE)
    hotel_id: str | None = None
    special_reqs: str | None = None

    @field_validator("adults", "kids", mode="after")
    @classmethod
    def default_count(cls, v: int | None) -> int:
        return v or 0

    @field_validator("hotel_id", "special_reqs", mode="after")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return v or None

class RSVPResponse(BaseSchema):
    message: str

class ProfileUpdate(BaseSchema):
    """Partial profile edit; only the fields sent are changed"""
    full_name: str | None = Field(default=None, min_length=2, max_length=200)
    current_designation: str | None = Field(default=None, max_length=200)
    workplace: str | None = Field(default=None, max_length=200)
    country: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    profile_photo_url: str | None = Field(default=None, max_length=500)

    @field_validator("full_name", mode="before")
    @classmethod
    def name_not_null(cls, v):
        if v is None:
            raise ValueError("Full name cannot be empty")
        return v.strip() if isinstance(v, str) else v

    @field_validator(
        "current_designation", "workplace", "country", "state", "city", "profile_photo_url",
        mode="after"
    )
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)

class MessageResponse(BaseSchema):
    message: str

class AlumniEntry(BaseSchema):
    """Directory view of a profile"""
    id: str
    full_name: str
    profile_photo_url: str | None = None
    current_designation: str | None = None
    workplace: str | None = None
    country: str | None = None
    state: str | None = None
    city: str | None = None
    rsvp_adults: int = 0

class AlumniListResponse(BaseSchema):
    data: list[AlumniEntry]
