"""
Review schemas.
"""
from uuid import UUID
from pydantic import Field
from jobnest.schemas.base import BaseSchema, TimestampSchema, IDSchema


class ReviewCreate(BaseSchema):
    """Review creation schema."""

    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)


class ReviewResponse(ReviewCreate, IDSchema, TimestampSchema):
    """Review response schema."""

    company_id: UUID
    author_id: UUID
