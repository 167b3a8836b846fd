"""
Pydantic schemas for API validation and serialization.
"""
from jobnest.schemas.base import (
    BaseSchema,
    MessageResponse,
    ErrorResponse,
)
from jobnest.schemas.identity import ExternalIdentity, SyncedIdentity
from jobnest.schemas.user import (
    JobSeekerProfile,
    RecruiterProfile,
    UserResponse,
    UserUpdate,
)
from jobnest.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
)
from jobnest.schemas.job import (
    CompanyBrief,
    JobCreate,
    JobResponse,
)
from jobnest.schemas.review import (
    ReviewCreate,
    ReviewResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "MessageResponse",
    "ErrorResponse",
    # Identity
    "ExternalIdentity",
    "SyncedIdentity",
    # User
    "JobSeekerProfile",
    "RecruiterProfile",
    "UserResponse",
    "UserUpdate",
    # Company
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    # Job
    "CompanyBrief",
    "JobCreate",
    "JobResponse",
    # Review
    "ReviewCreate",
    "ReviewResponse",
]
