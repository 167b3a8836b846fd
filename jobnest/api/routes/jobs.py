"""
Job routes.

Thin controllers - JobService does the work.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.database import get_db
from jobnest.core.rate_limit import limiter, RATE_WRITE
from jobnest.api.deps import get_current_user, get_recruiter_or_admin
from jobnest.models.user import User
from jobnest.services.job_service import JobService
from jobnest.schemas.base import MessageResponse
from jobnest.schemas.job import JobCreate, JobResponse

router = APIRouter(prefix="/jobs", tags=["jobs"])

job_service = JobService()


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    db: AsyncSession = Depends(get_db),
):
    """All active jobs, newest first."""
    return await job_service.list_jobs(db)


@router.get("/search", response_model=List[JobResponse])
async def search_jobs(
    keyword: str = Query(..., min_length=1, max_length=100, pattern=r"\S"),
    db: AsyncSession = Depends(get_db),
):
    """Search active jobs by keyword in title, description or location."""
    return await job_service.search_jobs(db, keyword)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single job by ID."""
    return await job_service.get_job(db, job_id)


@router.post("", response_model=JobResponse, status_code=201)
@limiter.limit(RATE_WRITE)
async def post_job(
    request: Request,
    data: JobCreate,
    current_user: User = Depends(get_recruiter_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Publish a job (recruiters and admins)."""
    return await job_service.post_job(db, current_user, data)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Take a job down (its poster or an admin)."""
    await job_service.delete_job(db, current_user, job_id)
    return MessageResponse(message="Job removed successfully")
