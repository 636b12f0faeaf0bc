from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reunion.core.exceptions import BackendError, NotFoundError
from reunion.core.logging import alumni_logger, auth_logger
from reunion.core.policy import Action, require
from reunion.core.security import Identity
from reunion.crud import profile as crud_profile
from reunion.crud import user as crud_user
from reunion.db.database import get_db
from reunion.schemas.profile import (
    AlumniProfileResponse,
    MessageResponse,
    OwnProfile,
    OwnProfileResponse,
    ProfileUpdate,
)
from reunion.schemas.user import UserInfo

router = APIRouter(
    tags=["Profile"],
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "User not found"}
    }
)

@router.get(
    "/me",
    response_model=OwnProfileResponse,
    summary="Fetch own profile",
    description="""
    The signed-in account and its alumni profile.

    `profile` is null when the account has no profile yet.
    """
)
async def read_own_profile(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(require(Action.FETCH_OWN_PROFILE))
) -> OwnProfileResponse:
    try:
        user = await crud_user.get_user_by_email(db, email=identity.email)
        if user is None:
            raise NotFoundError("User not found")
        profile = await crud_profile.get_profile_by_user_id(db, user.id)
    except SQLAlchemyError as e:
        auth_logger.error("Profile fetch failed", extra={"error": str(e), "user_id": identity.id}, exc_info=True)
        raise BackendError("Failed to fetch profile")

    return OwnProfileResponse(
        data=OwnProfile(
            user=UserInfo.model_validate(user),
            profile=AlumniProfileResponse.model_validate(profile) if profile else None
        )
    )

@router.put(
    "/user/profile",
    response_model=MessageResponse,
    summary="Update own profile",
    description="""
    Edit the directory fields of the signed-in member's profile.

    Only the fields present in the body change; sending `null` clears an
    optional field. RSVP state is changed through the RSVP endpoint.
    """,
    responses={
        404: {"description": "No profile for this account"}
    }
)
async def update_own_profile(
    *,
    db: AsyncSession = Depends(get_db),
    profile_in: ProfileUpdate,
    identity: Identity = Depends(require(Action.UPDATE_OWN_PROFILE))
) -> MessageResponse:
    changes = profile_in.changes()
    if not changes:
        return MessageResponse(message="No changes detected")

    try:
        updated = await crud_profile.update_profile_by_email(db, email=identity.email, changes=changes)
    except SQLAlchemyError as e:
        alumni_logger.error("Profile update failed", extra={"error": str(e), "user_id": identity.id}, exc_info=True)
        raise BackendError("Internal server error")

    if not updated:
        raise NotFoundError("Profile not found")

    alumni_logger.info("Profile updated", extra={"user_id": identity.id, "fields": sorted(changes)})
    return MessageResponse(message="Profile updated successfully")
