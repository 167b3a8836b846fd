"""
Company routes.

Thin controllers - CompanyService builds responses with job/review stats.
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.database import get_db
from jobnest.core.rate_limit import limiter, RATE_WRITE
from jobnest.api.deps import get_admin_user, get_job_seeker, get_recruiter_or_admin
from jobnest.models.user import User
from jobnest.services.company_service import CompanyService
from jobnest.services.job_service import JobService
from jobnest.services.review_service import ReviewService
from jobnest.schemas.base import MessageResponse
from jobnest.schemas.company import CompanyResponse, CompanyCreate, CompanyUpdate
from jobnest.schemas.job import JobResponse
from jobnest.schemas.review import ReviewCreate, ReviewResponse

router = APIRouter(prefix="/companies", tags=["companies"])

company_service = CompanyService()
job_service = JobService()
review_service = ReviewService()


@router.get("", response_model=List[CompanyResponse])
async def list_companies(
    db: AsyncSession = Depends(get_db),
):
    """List all companies with job/review stats."""
    return await company_service.list_companies(db)


@router.get("/search", response_model=List[CompanyResponse])
async def search_companies(
    keyword: str = Query(..., min_length=1, max_length=100, pattern=r"\S"),
    db: AsyncSession = Depends(get_db),
):
    """Search companies by keyword in name or description."""
    return await company_service.search_companies(db, keyword)


@router.post("", response_model=CompanyResponse, status_code=201)
@limiter.limit(RATE_WRITE)
async def create_company(
    request: Request,
    data: CompanyCreate,
    current_user: User = Depends(get_recruiter_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create a company (recruiters and admins)."""
    return await company_service.create_company(db, data)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single company by ID."""
    return await company_service.get_company(db, company_id)


@router.patch("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: UUID,
    data: CompanyUpdate,
    current_user: User = Depends(get_recruiter_or_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update a company's details (recruiters and admins)."""
    return await company_service.update_company(db, company_id, data)


@router.delete("/{company_id}", response_model=MessageResponse)
async def delete_company(
    company_id: UUID,
    admin: User = Depends(get_admin_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a company with its jobs and reviews (admins only)."""
    await company_service.delete_company(db, company_id)
    return MessageResponse(message="Company deleted successfully")


# ── Company jobs ─────────────────────────────────────────────────────────────

@router.get("/{company_id}/jobs", response_model=List[JobResponse])
async def list_company_jobs(
    company_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Active jobs of one company."""
    return await job_service.list_company_jobs(db, company_id)


# ── Reviews ──────────────────────────────────────────────────────────────────

@router.get("/{company_id}/reviews", response_model=List[ReviewResponse])
async def list_company_reviews(
    company_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Reviews of one company, newest first."""
    return await review_service.list_reviews(db, company_id)


@router.post("/{company_id}/reviews", response_model=ReviewResponse, status_code=201)
@limiter.limit(RATE_WRITE)
async def create_company_review(
    request: Request,
    company_id: UUID,
    data: ReviewCreate,
    current_user: User = Depends(get_job_seeker),
    db: AsyncSession = Depends(get_db),
):
    """Review a company (job seekers). One review per user per company."""
    return await review_service.create_review(db, current_user, company_id, data)
