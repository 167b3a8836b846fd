"""
API Routes package.
"""
from fastapi import APIRouter

from jobnest.api.routes.health import router as health_router
from jobnest.api.routes.users import router as users_router
from jobnest.api.routes.companies import router as companies_router
from jobnest.api.routes.jobs import router as jobs_router
from jobnest.api.routes.reviews import router as reviews_router

# Main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(users_router)
api_router.include_router(companies_router)
api_router.include_router(jobs_router)
api_router.include_router(reviews_router)

__all__ = [
    "api_router",
    "health_router",
    "users_router",
    "companies_router",
    "jobs_router",
    "reviews_router",
]
