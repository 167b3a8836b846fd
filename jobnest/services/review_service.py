"""
Review service - company reviews written by job seekers.
"""
from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.exceptions import (
    CompanyNotFoundException,
    ForbiddenException,
    ReviewAlreadyExistsException,
    ReviewNotFoundException,
)
from jobnest.core.logging import get_logger
from jobnest.models.user import User
from jobnest.repositories.company_repository import CompanyRepository
from jobnest.repositories.review_repository import ReviewRepository
from jobnest.schemas.review import ReviewCreate, ReviewResponse

logger = get_logger(__name__)


class ReviewService:
    """Handles company reviews."""

    def __init__(self):
        self.review_repo = ReviewRepository()
        self.company_repo = CompanyRepository()

    async def list_reviews(
        self,
        db: AsyncSession,
        company_id: UUID,
    ) -> List[ReviewResponse]:
        if not await self.company_repo.exists(db, company_id):
            raise CompanyNotFoundException()
        reviews = await self.review_repo.list_for_company(db, company_id)
        return [ReviewResponse.model_validate(review) for review in reviews]

    async def create_review(
        self,
        db: AsyncSession,
        user: User,
        company_id: UUID,
        data: ReviewCreate,
    ) -> ReviewResponse:
        """
        Raises:
            CompanyNotFoundException: If the company doesn't exist.
            ReviewAlreadyExistsException: If the user already reviewed it.
        """
        if not await self.company_repo.exists(db, company_id):
            raise CompanyNotFoundException()

        if await self.review_repo.get_by_company_and_author(db, company_id, user.id):
            raise ReviewAlreadyExistsException()

        try:
            review = await self.review_repo.create(
                db,
                company_id=company_id,
                author_id=user.id,
                **data.model_dump(),
            )
            await db.commit()
        except IntegrityError:
            # Lost a race against the same user's parallel submission
            await db.rollback()
            raise ReviewAlreadyExistsException()

        logger.info(
            "review_created",
            review_id=str(review.id),
            company_id=str(company_id),
            rating=review.rating,
        )
        return ReviewResponse.model_validate(review)

    async def delete_review(
        self,
        db: AsyncSession,
        user: User,
        review_id: UUID,
    ) -> None:
        """Only the author or an admin may delete a review."""
        review = await self.review_repo.get_by_id(db, review_id)
        if not review:
            raise ReviewNotFoundException()

        if not user.is_admin and review.author_id != user.id:
            raise ForbiddenException("Only the author or an admin can delete this review")

        await self.review_repo.delete(db, review_id)
        await db.commit()
        logger.info("review_deleted", review_id=str(review_id), deleted_by=str(user.id))
