"""
User routes.

Thin controllers - all business logic lives in UserService.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.database import get_db
from jobnest.api.deps import get_admin_user, get_current_user, get_recruiter_or_admin
from jobnest.models.user import Role, User
from jobnest.services.user_service import UserService
from jobnest.schemas.user import UserResponse, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])

user_service = UserService()


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get current user's profile (any authenticated user)."""
    return await user_service.get_profile(db, current_user)


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    request: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update current user's profile.

    Job seekers may set resume/skills/experience, recruiters their position.
    Fields for other roles are ignored.
    """
    return await user_service.update_profile(db, current_user, request)


@router.get("", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    """List all users (admins only)."""
    return await user_service.list_users(db)


@router.get("/job-seekers", response_model=List[UserResponse])
async def list_job_seekers(
    current_user: User = Depends(get_recruiter_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """List job seekers (recruiters and admins)."""
    return await user_service.list_users(db, role=Role.JOB_SEEKER)


@router.get("/recruiters", response_model=List[UserResponse])
async def list_recruiters(
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    """List recruiters (admins only)."""
    return await user_service.list_users(db, role=Role.RECRUITER)
