"""
Database models for JobNest.

All models use UUID primary keys and include created_at/updated_at timestamps.
"""
from jobnest.models.base import BaseModel, TimestampMixin, UUIDMixin
from jobnest.models.user import Role, User
from jobnest.models.company import Company
from jobnest.models.job import Job
from jobnest.models.review import Review

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "Role",
    "User",
    "Company",
    "Job",
    "Review",
]
