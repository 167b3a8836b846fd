"""
Company repository - data access for Company entity.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.models.company import Company
from jobnest.models.job import Job
from jobnest.models.review import Review
from jobnest.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    def __init__(self):
        super().__init__(Company)

    async def list_by_name(
        self,
        db: AsyncSession,
    ) -> List[Company]:
        """All companies in name order."""
        return await self.get_all(db, order_by=Company.name)

    async def search(
        self,
        db: AsyncSession,
        keyword: str,
    ) -> List[Company]:
        """Case-insensitive substring match on name or description."""
        needle = keyword.strip().lower()
        result = await db.execute(
            select(Company)
            .where(
                or_(
                    func.lower(Company.name).contains(needle, autoescape=True),
                    func.lower(Company.description).contains(needle, autoescape=True),
                )
            )
            .order_by(Company.name)
        )
        return list(result.scalars().all())

    async def get_stats(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> dict:
        """
        Active job count, review count and average rating for one company.
        """
        jobs_count = await db.execute(
            select(func.count()).where(
                Job.company_id == company_id,
                Job.is_active == True,
            )
        )
        reviews = await db.execute(
            select(func.count(Review.id), func.avg(Review.rating)).where(
                Review.company_id == company_id,
            )
        )
        reviews_count, average_rating = reviews.one()
        return {
            "jobs_count": jobs_count.scalar() or 0,
            "reviews_count": reviews_count or 0,
            "average_rating": round(float(average_rating), 2) if average_rating is not None else None,
        }

    async def exists(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> bool:
        result = await db.execute(
            select(Company.id).where(Company.id == company_id)
        )
        return result.scalar_one_or_none() is not None
