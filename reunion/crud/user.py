from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.metrics import record_db_operation
from reunion.core.security import get_password_hash
from reunion.models.enums import UserRole
from reunion.models.profile import AlumniProfile
from reunion.models.user import User
from reunion.schemas.user import UserRegister

async def get_user_by_email(db: AsyncSession, *, email: str) -> User | None:
    """Get a user by email"""
    record_db_operation("select", "users")
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()

async def register_user(db: AsyncSession, user_in: UserRegister) -> User:
    """Create an alumni account together with its empty profile"""
    db_user = User(
        email=user_in.email,
        password_hash=get_password_hash(user_in.password),
        role=UserRole.ALUMNI
    )
    db.add(db_user)
    await db.flush()
    db.add(AlumniProfile(
        user_id=db_user.id,
        full_name=user_in.full_name,
        email=user_in.email
    ))
    record_db_operation("insert", "users")
    record_db_operation("insert", "alumni_profiles")
    await db.commit()
    await db.refresh(db_user)
    return db_user
