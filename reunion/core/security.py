from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Any
from passlib.context import CryptContext
from jose import jwt, JWTError
from fastapi import Request
from fastapi.security.utils import get_authorization_scheme_param

from reunion.core.config import settings
from reunion.models.enums import UserRole

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SESSION_TOKEN_TYPE = "session"

@dataclass(frozen=True)
class Identity:
    """Caller resolved from a valid session"""
    id: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

def create_session_token(
    user_id: str,
    email: str,
    role: UserRole | str,
    expires_delta: timedelta | None = None
) -> str:
    """Create a signed session token"""
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=settings.SESSION_EXPIRE_MINUTES))
    to_encode: dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "role": UserRole(role).value,
        "type": SESSION_TOKEN_TYPE,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def decode_session_token(token: str) -> Identity | None:
    """Decode a session token, returning None when it is not usable"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None

    if payload.get("type") != SESSION_TOKEN_TYPE:
        return None
    user_id = payload.get("sub")
    email = payload.get("email")
    try:
        role = UserRole(payload.get("role"))
    except ValueError:
        return None
    if not user_id or not email:
        return None
    return Identity(id=user_id, email=email, role=role)

def _session_token_from(request: Request) -> str | None:
    scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() == "bearer" and token:
        return token
    return request.cookies.get(settings.SESSION_COOKIE_NAME)

def resolve_identity(request: Request) -> Identity | None:
    """Resolve the caller of a request; anonymous callers resolve to None"""
    token = _session_token_from(request)
    if not token:
        return None
    return decode_session_token(token)

async def get_identity(request: Request) -> Identity | None:
    """Dependency exposing the resolved caller to route handlers"""
    identity = resolve_identity(request)
    request.state.user_id = identity.id if identity else None
    return identity

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)
