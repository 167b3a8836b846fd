"""
User model - job seekers, recruiters and admins, keyed by the IdP subject id.
"""
import enum
import uuid
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import JSON, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobnest.models.base import BaseModel

if TYPE_CHECKING:
    from jobnest.models.company import Company
    from jobnest.models.job import Job
    from jobnest.models.review import Review


class Role(str, enum.Enum):
    """Closed set of user roles. Assigned on first sign-in, never changed."""

    JOB_SEEKER = "job_seeker"
    RECRUITER = "recruiter"
    ADMIN = "admin"


# Fields whose values come from identity provider claims.
# Only the identity synchronizer writes these.
IDENTITY_FIELDS = ("email", "first_name", "last_name")

# Column widths of the identity fields
SUBJECT_ID_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
NAME_MAX_LENGTH = 100


class User(BaseModel):
    """
    User entity.

    The row is created the first time a subject id is seen on a verified
    token and is never deleted by identity synchronization.
    """

    __tablename__ = "users"

    # Identity (owned by the synchronizer)
    subject_id: Mapped[str] = mapped_column(
        String(SUBJECT_ID_MAX_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    role: Mapped[Role] = mapped_column(
        Enum(
            Role,
            native_enum=False,
            length=20,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        index=True,
    )
    email: Mapped[Optional[str]] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=True, index=True)
    first_name: Mapped[Optional[str]] = mapped_column(String(NAME_MAX_LENGTH), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(NAME_MAX_LENGTH), nullable=True)

    # Profile (owned by the user)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Job seeker payload
    resume: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # reference, not the file
    skills: Mapped[Optional[List[str]]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )
    experience: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Recruiter payload
    position: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    company_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    company: Mapped[Optional["Company"]] = relationship("Company", back_populates="recruiters")
    posted_jobs: Mapped[List["Job"]] = relationship("Job", back_populates="posted_by")
    reviews: Mapped[List["Review"]] = relationship("Review", back_populates="author")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __repr__(self) -> str:
        return f"<User {self.subject_id} ({self.role.value if self.role else None})>"
