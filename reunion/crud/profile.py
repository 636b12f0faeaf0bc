from datetime import datetime, UTC
from typing import Any, List
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.metrics import record_db_operation
from reunion.models.profile import AlumniProfile
from reunion.schemas.profile import RSVPSubmit

async def get_profile_by_user_id(db: AsyncSession, user_id: str) -> AlumniProfile | None:
    record_db_operation("select", "alumni_profiles")
    result = await db.execute(select(AlumniProfile).where(AlumniProfile.user_id == user_id))
    return result.scalar_one_or_none()

async def get_profile_by_email(db: AsyncSession, *, email: str) -> AlumniProfile | None:
    record_db_operation("select", "alumni_profiles")
    result = await db.execute(select(AlumniProfile).where(AlumniProfile.email == email))
    return result.scalar_one_or_none()

async def update_rsvp_by_email(db: AsyncSession, *, email: str, rsvp_in: RSVPSubmit) -> int:
    """Overwrite the RSVP fields of the profile with this email.

    Returns the number of rows changed, which is 0 when no profile carries
    the email.
    """
    stmt = (
        update(AlumniProfile)
        .where(AlumniProfile.email == email)
        .values(
            rsvp_adults=rsvp_in.adults,
            rsvp_kids=rsvp_in.kids,
            hotel_selection_id=rsvp_in.hotel_id,
            special_reqs=rsvp_in.special_reqs,
            updated_at=datetime.now(UTC)
        )
    )
    record_db_operation("update", "alumni_profiles")
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount

async def update_profile_by_email(db: AsyncSession, *, email: str, changes: dict[str, Any]) -> int:
    """Apply a partial edit to the profile with this email; returns rows changed"""
    stmt = (
        update(AlumniProfile)
        .where(AlumniProfile.email == email)
        .values(**changes, updated_at=datetime.now(UTC))
    )
    record_db_operation("update", "alumni_profiles")
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount

async def list_alumni(
    db: AsyncSession,
    *,
    search: str | None = None,
    limit: int = 20,
    offset: int = 0
) -> List[AlumniProfile]:
    """Directory page ordered by name, optionally filtered on name, city or workplace"""
    query = select(AlumniProfile)
    if search:
        query = query.where(or_(
            AlumniProfile.full_name.contains(search, autoescape=True),
            AlumniProfile.city.contains(search, autoescape=True),
            AlumniProfile.workplace.contains(search, autoescape=True),
        ))
    query = query.order_by(AlumniProfile.full_name.asc(), AlumniProfile.id).limit(limit).offset(offset)
    record_db_operation("select", "alumni_profiles")
    result = await db.execute(query)
    return list(result.scalars().all())
