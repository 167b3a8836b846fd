"""
Job schemas.
"""
from typing import Optional
from uuid import UUID
from pydantic import Field, model_validator
from jobnest.schemas.base import BaseSchema, TimestampSchema, IDSchema


class CompanyBrief(BaseSchema):
    """Brief company info for job responses."""

    id: UUID
    name: str
    logo_url: Optional[str] = None


class JobBase(BaseSchema):
    """Base job schema."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    location: Optional[str] = Field(default=None, max_length=255)
    job_type: Optional[str] = Field(default=None, max_length=50)  # 'full_time', 'part_time', 'contract', 'internship'
    salary_min: Optional[int] = Field(default=None, ge=0)
    salary_max: Optional[int] = Field(default=None, ge=0)
    salary_currency: Optional[str] = Field(default=None, max_length=10)


class JobCreate(JobBase):
    """Job creation schema."""

    company_id: UUID

    @model_validator(mode="after")
    def _check_salary_range(self) -> "JobCreate":
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError("salary_min cannot exceed salary_max")
        return self


class JobResponse(JobBase, IDSchema, TimestampSchema):
    """Job response."""

    company: CompanyBrief
    posted_by_id: Optional[UUID] = None
    is_active: bool
