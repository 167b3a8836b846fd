"""
Review model - a user's rating of a company.
"""
import uuid
from typing import TYPE_CHECKING
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobnest.models.base import BaseModel

if TYPE_CHECKING:
    from jobnest.models.company import Company
    from jobnest.models.user import User


class Review(BaseModel):
    """Company review. One per (company, author)."""

    __tablename__ = "reviews"

    __table_args__ = (
        UniqueConstraint("company_id", "author_id", name="uq_review_company_author"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )

    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    company: Mapped["Company"] = relationship("Company", back_populates="reviews")
    author: Mapped["User"] = relationship("User", back_populates="reviews")

    def __repr__(self) -> str:
        return f"<Review {self.rating}/5 for {self.company_id}>"
