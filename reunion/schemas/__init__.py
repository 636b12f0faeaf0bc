from .base import BaseSchema
from .user import (
    UserRegister,
    UserLogin,
    UserInfo,
    RegisterResponse,
    LoginResponse,
)
from .profile import (
    AlumniProfileResponse,
    OwnProfile,
    OwnProfileResponse,
    RSVPSubmit,
    RSVPResponse,
    ProfileUpdate,
    MessageResponse,
    AlumniEntry,
    AlumniListResponse,
)
from .hotel import (
    HotelCreate,
    HotelCreated,
    HotelSummary,
    HotelListResponse,
)
from .memory import (
    MemoryResponse,
    MemoryListResponse,
    MemoryCreated,
)
from .event import (
    EventCreate,
    EventResponse,
    EventListResponse,
    EventCreated,
)
from .common import (
    DeleteResponse,
    UploadResponse,
    CountriesResponse,
    StatesResponse,
    CitiesResponse,
)

__all__ = [
    "BaseSchema",
    "UserRegister",
    "UserLogin",
    "UserInfo",
    "RegisterResponse",
    "LoginResponse",
    "AlumniProfileResponse",
    "OwnProfile",
    "OwnProfileResponse",
    "RSVPSubmit",
    "RSVPResponse",
    "ProfileUpdate",
    "MessageResponse",
    "AlumniEntry",
    "AlumniListResponse",
    "HotelCreate",
    "HotelCreated",
    "HotelSummary",
    "HotelListResponse",
    "MemoryResponse",
    "MemoryListResponse",
    "MemoryCreated",
    "EventCreate",
    "EventResponse",
    "EventListResponse",
    "EventCreated",
    "DeleteResponse",
    "UploadResponse",
    "CountriesResponse",
    "StatesResponse",
    "CitiesResponse",
]
