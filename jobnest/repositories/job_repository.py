"""
Job repository - data access for Job entity.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from jobnest.models.job import Job
from jobnest.repositories.base import BaseRepository


class JobRepository(BaseRepository[Job]):
    def __init__(self):
        super().__init__(Job)

    async def list_active(
        self,
        db: AsyncSession,
        *,
        company_id: Optional[UUID] = None,
    ) -> List[Job]:
        """Active jobs with their company, newest first."""
        query = (
            select(Job)
            .options(selectinload(Job.company))
            .where(Job.is_active == True)
        )
        if company_id is not None:
            query = query.where(Job.company_id == company_id)

        result = await db.execute(query.order_by(Job.created_at.desc(), Job.id))
        return list(result.scalars().all())

    async def search(
        self,
        db: AsyncSession,
        keyword: str,
    ) -> List[Job]:
        """Case-insensitive substring match on title, description or location."""
        needle = keyword.strip().lower()
        result = await db.execute(
            select(Job)
            .options(selectinload(Job.company))
            .where(
                Job.is_active == True,
                or_(
                    func.lower(Job.title).contains(needle, autoescape=True),
                    func.lower(Job.description).contains(needle, autoescape=True),
                    func.lower(Job.location).contains(needle, autoescape=True),
                ),
            )
            .order_by(Job.created_at.desc(), Job.id)
        )
        return list(result.scalars().all())

    async def get_with_company(
        self,
        db: AsyncSession,
        job_id: UUID,
    ) -> Optional[Job]:
        """Get a job with company eagerly loaded."""
        result = await db.execute(
            select(Job)
            .options(selectinload(Job.company))
            .where(Job.id == job_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
