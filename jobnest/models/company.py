"""
Company model - employers that post jobs and receive reviews.
"""
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobnest.models.base import BaseModel

if TYPE_CHECKING:
    from jobnest.models.job import Job
    from jobnest.models.review import Review
    from jobnest.models.user import User


class Company(BaseModel):
    """Company entity."""

    __tablename__ = "companies"

    # Fields
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    careers_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    jobs: Mapped[List["Job"]] = relationship(
        "Job",
        back_populates="company",
        cascade="all, delete-orphan",
    )
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="company",
        cascade="all, delete-orphan",
    )
    recruiters: Mapped[List["User"]] = relationship("User", back_populates="company")

    def __repr__(self) -> str:
        return f"<Company {self.name}>"
