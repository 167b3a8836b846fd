"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from jobnest.repositories.base import BaseRepository
from jobnest.repositories.user_repository import UserRepository
from jobnest.repositories.company_repository import CompanyRepository
from jobnest.repositories.job_repository import JobRepository
from jobnest.repositories.review_repository import ReviewRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CompanyRepository",
    "JobRepository",
    "ReviewRepository",
]
