from fastapi import APIRouter

from booking.api.routers import bookings, locations, policy_overrides

api_router = APIRouter()

api_router.include_router(locations.router)
api_router.include_router(bookings.router)
api_router.include_router(policy_overrides.router)
