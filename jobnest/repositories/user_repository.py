"""
User repository - data access for User entity.

This is the user store the identity synchronizer relies on:
get_by_subject_id / create_for_subject / update.
"""
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.exceptions import SubjectConflictException
from jobnest.models.user import Role, User
from jobnest.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self):
        super().__init__(User)

    async def get_by_subject_id(
        self,
        db: AsyncSession,
        subject_id: str,
    ) -> Optional[User]:
        """Find a user by the identity provider's subject id."""
        result = await db.execute(
            select(User).where(User.subject_id == subject_id)
        )
        return result.scalar_one_or_none()

    async def create_for_subject(
        self,
        db: AsyncSession,
        subject_id: str,
        role: Role,
        **fields: Any,
    ) -> User:
        """
        Insert a user for a previously unseen subject id.

        The unique constraint on subject_id decides races between parallel
        first requests. The caller owns the transaction and must roll back
        after a conflict.

        Raises:
            SubjectConflictException: If the subject id already exists.
        """
        try:
            return await self.create(db, subject_id=subject_id, role=role, **fields)
        except IntegrityError as exc:
            raise SubjectConflictException(subject_id) from exc

    async def list_all(
        self,
        db: AsyncSession,
    ) -> List[User]:
        """All users, oldest first."""
        return await self.get_all(db, order_by=User.created_at)

    async def list_by_role(
        self,
        db: AsyncSession,
        role: Role,
    ) -> List[User]:
        """All users holding a role, oldest first."""
        result = await db.execute(
            select(User)
            .where(User.role == role)
            .order_by(User.created_at)
        )
        return list(result.scalars().all())
