"""
Review repository - data access for Review entity.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.models.review import Review
from jobnest.repositories.base import BaseRepository


class ReviewRepository(BaseRepository[Review]):
    def __init__(self):
        super().__init__(Review)

    async def list_for_company(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> List[Review]:
        """Reviews of a company, newest first."""
        result = await db.execute(
            select(Review)
            .where(Review.company_id == company_id)
            .order_by(Review.created_at.desc(), Review.id)
        )
        return list(result.scalars().all())

    async def get_by_company_and_author(
        self,
        db: AsyncSession,
        company_id: UUID,
        author_id: UUID,
    ) -> Optional[Review]:
        result = await db.execute(
            select(Review).where(
                Review.company_id == company_id,
                Review.author_id == author_id,
            )
        )
        return result.scalar_one_or_none()
