"""
Service layer - business logic and orchestration.

Services contain the application's business logic, coordinate between
repositories, and handle cross-cutting concerns.

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from jobnest.services.user_synchronizer import UserSynchronizer
from jobnest.services.user_service import UserService
from jobnest.services.company_service import CompanyService
from jobnest.services.job_service import JobService
from jobnest.services.review_service import ReviewService

__all__ = [
    "UserSynchronizer",
    "UserService",
    "CompanyService",
    "JobService",
    "ReviewService",
]
