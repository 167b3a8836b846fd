"""
Identity synchronizer - keeps local users in step with the identity provider.

Runs on every authenticated request (via the identity gate), so the common
path is one SELECT and no write. Guarantees:

- Idempotent: replaying the same claims changes nothing.
- Only identity-derived fields (email, names) are ever written here; the
  role is set once on creation, profile fields are never touched.
- Parallel first requests for one subject end with exactly one row. The
  unique constraint on subject_id picks the winner, losers re-read and carry
  on down the update path. No lock is shared between subjects.
- All writes go through one transaction per attempt, so an aborted request
  leaves either the committed result or nothing.
"""
import asyncio

from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.config import Settings, settings
from jobnest.core.exceptions import StoreUnavailableException, SubjectConflictException
from jobnest.core.logging import get_logger
from jobnest.core.security import VerifiedToken
from jobnest.models.user import Role, User
from jobnest.repositories.user_repository import UserRepository
from jobnest.schemas.identity import ExternalIdentity

logger = get_logger(__name__)

# Failures that mean "the store is not there", as opposed to bad data
STORE_ERRORS = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    asyncio.TimeoutError,
    OSError,
)


class UserSynchronizer:
    """Reconciles verified provider identities with the user store."""

    def __init__(self, config: Settings = settings):
        self.config = config
        self.user_repo = UserRepository()

    async def synchronize_with_idp(
        self,
        db: AsyncSession,
        token: VerifiedToken,
    ) -> User:
        """
        Make sure a local user exists for the token and matches its claims.

        Args:
            db: A session dedicated to this synchronization
            token: Token already verified upstream (signature, expiry)

        Returns:
            The created or up-to-date user

        Raises:
            MalformedClaimsException: If the token has no subject id.
            StoreUnavailableException: If the user store can't be reached.
        """
        identity = ExternalIdentity.from_token(token, self.config)

        try:
            return await self._synchronize(db, identity)
        except STORE_ERRORS as exc:
            logger.error(
                "identity_store_unavailable",
                subject_id=identity.subject_id,
                exc_type=type(exc).__name__,
                error=str(exc),
            )
            await self._rollback_quietly(db)
            raise StoreUnavailableException() from exc

    async def _synchronize(
        self,
        db: AsyncSession,
        identity: ExternalIdentity,
    ) -> User:
        attempts = self.config.identity_sync_max_attempts

        for attempt in range(1, attempts + 1):
            user = await self.user_repo.get_by_subject_id(db, identity.subject_id)
            if user is not None:
                return await self._reconcile(db, user, identity)

            try:
                user = await self.user_repo.create_for_subject(
                    db,
                    identity.subject_id,
                    identity.role or Role(self.config.default_user_role),
                    **identity.identity_fields(),
                )
                await db.commit()
            except SubjectConflictException:
                # Another request created this subject first
                await db.rollback()
                logger.info(
                    "identity_sync_conflict",
                    subject_id=identity.subject_id,
                    attempt=attempt,
                )
                continue

            logger.info(
                "identity_user_created",
                subject_id=identity.subject_id,
                user_id=str(user.id),
                role=user.role.value,
            )
            return user

        # Conflict reported every time yet the row never became visible
        logger.error(
            "identity_sync_gave_up",
            subject_id=identity.subject_id,
            attempts=attempts,
        )
        raise StoreUnavailableException()

    async def _reconcile(
        self,
        db: AsyncSession,
        user: User,
        identity: ExternalIdentity,
    ) -> User:
        """Write back identity fields that drifted. No drift, no write."""
        drift = {
            name: value
            for name, value in identity.identity_fields().items()
            if getattr(user, name) != value
        }
        if not drift:
            return user

        user = await self.user_repo.update(db, user, **drift)
        await db.commit()

        logger.info(
            "identity_user_updated",
            subject_id=identity.subject_id,
            user_id=str(user.id),
            fields=sorted(drift),
        )
        return user

    async def _rollback_quietly(self, db: AsyncSession) -> None:
        # The connection is usually gone at this point; rollback is best effort
        try:
            await db.rollback()
        except STORE_ERRORS as exc:
            logger.warning("identity_rollback_failed", error=str(exc))
