from enum import Enum

class UserRole(str, Enum):
    """Roles a session can carry"""
    USER = "user"
    ALUMNI = "alumni"
    ADMIN = "admin"
