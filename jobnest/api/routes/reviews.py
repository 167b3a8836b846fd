"""
Review routes. Listing and creation live under /companies/{id}/reviews.
"""
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.database import get_db
from jobnest.api.deps import get_current_user
from jobnest.models.user import User
from jobnest.services.review_service import ReviewService
from jobnest.schemas.base import MessageResponse

router = APIRouter(prefix="/reviews", tags=["reviews"])

review_service = ReviewService()


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete a review (its author or an admin)."""
    await review_service.delete_review(db, current_user, review_id)
    return MessageResponse(message="Review deleted successfully")
