"""
Job service - business logic for job listing, search, posting and removal.
"""
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.exceptions import (
    CompanyNotFoundException,
    ForbiddenException,
    JobNotFoundException,
)
from jobnest.core.logging import get_logger
from jobnest.models.job import Job
from jobnest.models.user import User
from jobnest.repositories.company_repository import CompanyRepository
from jobnest.repositories.job_repository import JobRepository
from jobnest.schemas.job import CompanyBrief, JobCreate, JobResponse

logger = get_logger(__name__)


class JobService:
    """Handles job search, detail retrieval and posting."""

    def __init__(self):
        self.job_repo = JobRepository()
        self.company_repo = CompanyRepository()

    async def list_jobs(
        self,
        db: AsyncSession,
    ) -> List[JobResponse]:
        """All active jobs, newest first."""
        jobs = await self.job_repo.list_active(db)
        return [self._to_response(job) for job in jobs]

    async def search_jobs(
        self,
        db: AsyncSession,
        keyword: str,
    ) -> List[JobResponse]:
        """Keyword search over title, description and location. No ranking."""
        jobs = await self.job_repo.search(db, keyword)
        return [self._to_response(job) for job in jobs]

    async def list_company_jobs(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> List[JobResponse]:
        if not await self.company_repo.exists(db, company_id):
            raise CompanyNotFoundException()
        jobs = await self.job_repo.list_active(db, company_id=company_id)
        return [self._to_response(job) for job in jobs]

    async def get_job(
        self,
        db: AsyncSession,
        job_id: UUID,
    ) -> JobResponse:
        """
        Raises:
            JobNotFoundException: If the job doesn't exist or was removed.
        """
        job = await self.job_repo.get_with_company(db, job_id)
        if not job or not job.is_active:
            raise JobNotFoundException()
        return self._to_response(job)

    async def post_job(
        self,
        db: AsyncSession,
        user: User,
        data: JobCreate,
    ) -> JobResponse:
        """
        Publish a job on behalf of a recruiter or admin.

        Raises:
            CompanyNotFoundException: If the target company doesn't exist.
        """
        if not await self.company_repo.exists(db, data.company_id):
            raise CompanyNotFoundException()

        job = await self.job_repo.create(db, posted_by_id=user.id, **data.model_dump())
        await db.commit()

        logger.info(
            "job_posted",
            job_id=str(job.id),
            company_id=str(job.company_id),
            posted_by=str(user.id),
        )
        return await self.get_job(db, job.id)

    async def delete_job(
        self,
        db: AsyncSession,
        user: User,
        job_id: UUID,
    ) -> None:
        """
        Take a job down (soft delete). Only its poster or an admin may.

        Raises:
            JobNotFoundException: If the job doesn't exist.
            ForbiddenException: If the caller neither posted it nor is admin.
        """
        job = await self.job_repo.get_by_id(db, job_id)
        if not job or not job.is_active:
            raise JobNotFoundException()

        if not user.is_admin and job.posted_by_id != user.id:
            raise ForbiddenException("Only the poster or an admin can remove this job")

        await self.job_repo.update(db, job, is_active=False)
        await db.commit()
        logger.info("job_removed", job_id=str(job_id), removed_by=str(user.id))

    def _to_response(self, job: Job) -> JobResponse:
        """Convert a Job model (company loaded) to a JobResponse."""
        return JobResponse(
            id=job.id,
            title=job.title,
            description=job.description,
            location=job.location,
            job_type=job.job_type,
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            salary_currency=job.salary_currency,
            company=CompanyBrief(
                id=job.company.id,
                name=job.company.name,
                logo_url=job.company.logo_url,
            ),
            posted_by_id=job.posted_by_id,
            is_active=job.is_active,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )
