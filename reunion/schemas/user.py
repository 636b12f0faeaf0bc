from pydantic import EmailStr, Field
from reunion.models.enums import UserRole
from .base import BaseSchema

class UserRegister(BaseSchema):
    """Schema for self-service registration"""
    full_name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8)

class UserLogin(BaseSchema):
    email: EmailStr
    password: str

class UserInfo(BaseSchema):
    """Public view of an account"""
    id: str
    email: str
    role: UserRole

class RegisterResponse(BaseSchema):
    message: str
    user_id: str

class LoginResponse(BaseSchema):
    access_token: str
    token_type: str = "bearer"
    user: UserInfo
