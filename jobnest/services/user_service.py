"""
User service - business logic for user profile management.

This service owns ALL user profile operations. Routes never touch
the database directly - they call methods here.

Identity-derived fields (email, names) and the role are NOT editable here;
the identity synchronizer owns them.
"""
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.logging import get_logger
from jobnest.models.user import Role, User
from jobnest.repositories.user_repository import UserRepository
from jobnest.schemas.user import (
    JobSeekerProfile,
    RecruiterProfile,
    UserResponse,
    UserUpdate,
)

logger = get_logger(__name__)

# Editable by every role
COMMON_PROFILE_FIELDS = ("phone_number",)

# Editable field group per role tag
ROLE_PROFILE_FIELDS = {
    Role.JOB_SEEKER: ("resume", "skills", "experience"),
    Role.RECRUITER: ("position",),
    Role.ADMIN: (),
}


def _clean_skills(skills: List[str]) -> List[str]:
    """Trim, drop blanks and case-insensitive duplicates, keep order."""
    seen = set()
    cleaned = []
    for skill in skills:
        name = skill.strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            cleaned.append(name)
    return cleaned


def role_profile(user: User) -> Optional[Union[JobSeekerProfile, RecruiterProfile]]:
    """The role-specific payload for a user, tagged by role."""
    if user.role == Role.JOB_SEEKER:
        return JobSeekerProfile(
            resume=user.resume,
            skills=list(user.skills or []),
            experience=user.experience,
        )
    if user.role == Role.RECRUITER:
        return RecruiterProfile(
            position=user.position,
            company_id=user.company_id,
        )
    return None


class UserService:
    """Handles user profile operations."""

    def __init__(self):
        self.user_repo = UserRepository()

    async def get_profile(
        self,
        db: AsyncSession,
        user: User,
    ) -> UserResponse:
        """Get the current user's profile."""
        return self._to_response(user)

    async def update_profile(
        self,
        db: AsyncSession,
        user: User,
        request: UserUpdate,
    ) -> UserResponse:
        """
        Partially update a profile.

        Only fields for the user's own role are applied; null fields and
        fields belonging to other roles are ignored.
        """
        editable = COMMON_PROFILE_FIELDS + ROLE_PROFILE_FIELDS[user.role]

        updates = {}
        for name in editable:
            value = getattr(request, name)
            if value is None:
                continue
            if name == "skills":
                value = _clean_skills(value)
            updates[name] = value

        ignored = sorted(
            name
            for name in request.model_fields_set
            if name not in editable and getattr(request, name) is not None
        )
        if ignored:
            logger.info(
                "profile_fields_ignored",
                user_id=str(user.id),
                role=user.role.value,
                fields=ignored,
            )

        if updates:
            user = await self.user_repo.update(db, user, **updates)
            await db.commit()

        return self._to_response(user)

    async def list_users(
        self,
        db: AsyncSession,
        role: Optional[Role] = None,
    ) -> List[UserResponse]:
        """All users, optionally restricted to one role."""
        if role is None:
            users = await self.user_repo.list_all(db)
        else:
            users = await self.user_repo.list_by_role(db, role)
        return [self._to_response(user) for user in users]

    def _to_response(self, user: User) -> UserResponse:
        """
        Convert a User model to UserResponse schema.

        Centralized here so every method returns consistent data.
        """
        return UserResponse(
            id=user.id,
            subject_id=user.subject_id,
            role=user.role,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            phone_number=user.phone_number,
            profile=role_profile(user),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
