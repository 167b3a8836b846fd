"""
User schemas.

Role-specific profile data is exposed as a tagged payload: the `kind`
field says which role the payload belongs to.
"""
from typing import Annotated, List, Literal, Optional, Union
from uuid import UUID
from pydantic import Field

from jobnest.models.user import Role
from jobnest.schemas.base import BaseSchema, TimestampSchema, IDSchema


class JobSeekerProfile(BaseSchema):
    """Job seeker payload."""

    kind: Literal["job_seeker"] = "job_seeker"
    resume: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience: Optional[str] = None


class RecruiterProfile(BaseSchema):
    """Recruiter payload."""

    kind: Literal["recruiter"] = "recruiter"
    position: Optional[str] = None
    company_id: Optional[UUID] = None


RoleProfile = Annotated[
    Union[JobSeekerProfile, RecruiterProfile],
    Field(discriminator="kind"),
]


class UserResponse(IDSchema, TimestampSchema):
    """User response schema."""

    subject_id: str
    role: Role
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    profile: Optional[RoleProfile] = None


class UserUpdate(BaseSchema):
    """
    Profile update request.

    Every field is optional; omitted (null) fields are left untouched.
    Fields that don't apply to the caller's role are ignored.
    """

    phone_number: Optional[str] = Field(default=None, max_length=20)

    # Job seeker
    resume: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[str] = None

    # Recruiter
    position: Optional[str] = Field(default=None, max_length=100)
