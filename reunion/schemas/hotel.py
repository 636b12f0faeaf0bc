from pydantic import Field, field_validator
from .base import BaseSchema

class HotelCreate(BaseSchema):
    """Schema for suggesting a hotel"""
    name: str = Field(..., max_length=200)
    website_url: str = Field(..., max_length=500)
    description: str | None = None

    @field_validator("name", "website_url", mode="after")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name and Website URL are required")
        return v

class HotelCreated(BaseSchema):
    success: bool = True
    id: str

class HotelSummary(BaseSchema):
    id: str
    name: str

class HotelListResponse(BaseSchema):
    data: list[HotelSummary]

