"""
Company schemas.
"""
from typing import Optional
from pydantic import Field
from jobnest.schemas.base import BaseSchema, TimestampSchema, IDSchema


class CompanyBase(BaseSchema):
    """Base company schema."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    careers_url: Optional[str] = None
    logo_url: Optional[str] = None


class CompanyCreate(CompanyBase):
    """Company creation schema."""

    pass


class CompanyUpdate(BaseSchema):
    """Company update schema."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    careers_url: Optional[str] = None
    logo_url: Optional[str] = None


class CompanyResponse(CompanyBase, IDSchema, TimestampSchema):
    """Company response schema."""

    jobs_count: int = 0
    reviews_count: int = 0
    average_rating: Optional[float] = None
