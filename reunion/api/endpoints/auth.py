from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.config import settings
from reunion.core.exceptions import AuthenticationError, BackendError, ConflictError, ValidationError
from reunion.core.logging import auth_logger
from reunion.core.metrics import record_auth_attempt
from reunion.core.security import create_session_token, verify_password
from reunion.crud.profile import get_profile_by_email
from reunion.crud.user import get_user_by_email, register_user
from reunion.db.database import get_db
from reunion.schemas.user import LoginResponse, RegisterResponse, UserInfo, UserLogin, UserRegister

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Invalid input"},
        401: {"description": "Authentication failed"},
        500: {"description": "Internal server error"}
    }
)

def check_email_domain(email: str) -> None:
    """Only well-known mail providers may self-register."""
    domain = email.rsplit("@", 1)[-1].lower()
    if domain not in settings.ALLOWED_EMAIL_DOMAINS:
        raise ValidationError(
            f'Please use a recognized email provider (e.g., @gmail.com, @yahoo.com). "{domain}" is not allowed.'
        )

@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    summary="Register new alumni account",
    description="""
    Register a new alumni account.

    The endpoint performs the following:
    * Validates the email domain against the allowed providers
    * Rejects emails that already belong to an account or a profile
    * Creates the account with the `alumni` role and an empty profile
    """,
    responses={
        201: {
            "description": "Account created",
            "content": {
                "application/json": {
                    "example": {"message": "User created successfully", "userId": "5b0e..."}
                }
            }
        },
        409: {
            "description": "Email already registered",
            "content": {
                "application/json": {
                    "example": {"error": "User with this email already exists"}
                }
            }
        }
    }
)
async def register(
    *,
    db: AsyncSession = Depends(get_db),
    user_in: UserRegister
) -> RegisterResponse:
    """
    Register a new alumni account.

    - **fullName**: Name shown in the alumni directory
    - **email**: Unique email address from an allowed provider
    - **password**: At least 8 characters
    """
    check_email_domain(user_in.email)

    try:
        if await get_user_by_email(db, email=user_in.email):
            raise ConflictError("User with this email already exists")
        if await get_profile_by_email(db, email=user_in.email):
            raise ConflictError("A profile with this email already exists")

        user = await register_user(db, user_in)
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        auth_logger.warning("Registration conflict", extra={"email_domain": user_in.email.rsplit("@", 1)[-1]})
        raise ConflictError("User with this email already exists")
    except SQLAlchemyError as e:
        auth_logger.error("Registration failed", extra={"error": str(e)}, exc_info=True)
        raise BackendError("Failed to register user")

    auth_logger.info("User registered", extra={"user_id": user.id})
    return RegisterResponse(message="User created successfully", user_id=user.id)

@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Sign in",
    description="""
    Authenticate with email and password.

    Returns a session token and also sets it as an HTTP-only cookie, so both
    API clients (`Authorization: Bearer <token>`) and browsers work.
    """,
    responses={
        401: {
            "description": "Invalid credentials",
            "content": {
                "application/json": {
                    "example": {"error": "Incorrect email or password"}
                }
            }
        }
    }
)
async def login(
    response: Response,
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
) -> LoginResponse:
    try:
        user = await get_user_by_email(db, email=credentials.email)
    except SQLAlchemyError as e:
        auth_logger.error("Login lookup failed", extra={"error": str(e)}, exc_info=True)
        raise BackendError("Failed to sign in")

    if not user or not verify_password(credentials.password, user.password_hash):
        record_auth_attempt(False, "password")
        raise AuthenticationError("Incorrect email or password")

    record_auth_attempt(True, "password")
    token = create_session_token(user.id, user.email, user.role)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT.lower() == "production"
    )
    return LoginResponse(access_token=token, user=UserInfo.model_validate(user))

@router.post(
    "/logout",
    summary="Sign out",
    responses={
        200: {
            "description": "Session cookie cleared",
            "content": {
                "application/json": {
                    "example": {"message": "Successfully logged out"}
                }
            }
        }
    }
)
async def logout(response: Response) -> dict:
    """Clear the session cookie. Bearer-token clients simply discard the token."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Successfully logged out"}
