"""
Job model - a job posting published by a recruiter for a company.
"""
import uuid
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Boolean, Text, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobnest.models.base import BaseModel

if TYPE_CHECKING:
    from jobnest.models.company import Company
    from jobnest.models.user import User


class Job(BaseModel):
    """
    Job posting entity.

    Deleting a job only deactivates it; applicants may still hold links to it.
    """

    __tablename__ = "jobs"

    # Foreign Keys
    company_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    posted_by_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Core fields
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    job_type: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )  # 'full_time', 'part_time', 'contract', 'internship'

    # Salary (optional)
    salary_min: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    salary_max: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    salary_currency: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Relationships
    company: Mapped["Company"] = relationship("Company", back_populates="jobs")
    posted_by: Mapped[Optional["User"]] = relationship("User", back_populates="posted_jobs")

    def __repr__(self) -> str:
        return f"<Job {self.title} at {self.company_id}>"
