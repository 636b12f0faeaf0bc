from fastapi import APIRouter

from reunion.api.endpoints import alumni, auth, events, hotels, locations, memories, profile, uploads

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router)
api_router.include_router(profile.router)
api_router.include_router(alumni.router)
api_router.include_router(events.router)
api_router.include_router(hotels.router)
api_router.include_router(memories.router)
api_router.include_router(memories.admin_router)
api_router.include_router(uploads.router)
api_router.include_router(locations.router)
