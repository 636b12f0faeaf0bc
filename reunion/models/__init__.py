from .base import Base
from .enums import UserRole
from .user import User
from .profile import AlumniProfile
from .hotel import Hotel
from .memory import Memory
from .event import Event

__all__ = [
    "Base",
    "UserRole",
    "User",
    "AlumniProfile",
    "Hotel",
    "Memory",
    "Event",
]
