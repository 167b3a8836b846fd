"""
API dependencies for dependency injection.

Authentication itself happens in the identity gate middleware; these
dependencies only read what it left on request.state. Nothing here
synchronizes again, however many role checks a route stacks up.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from jobnest.core.database import get_db
from jobnest.core.exceptions import (
    UnauthorizedException,
    ForbiddenException,
    UserNotFoundException,
)
from jobnest.core.security import SecurityContext
from jobnest.models.user import Role, User
from jobnest.repositories.user_repository import UserRepository
from jobnest.schemas.identity import SyncedIdentity


# Security scheme (documents the bearer header in OpenAPI; the gate does the work)
security = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def get_security_context(request: Request) -> SecurityContext:
    """The request's security context, anonymous if the gate didn't run."""
    context = getattr(request.state, "security_context", None)
    return context if context is not None else SecurityContext.anonymous()


def get_synced_identity(request: Request) -> Optional[SyncedIdentity]:
    """Identity the gate synchronized for this request, if any."""
    return getattr(request.state, "identity", None)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity: Optional[SyncedIdentity] = Depends(get_synced_identity),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user.

    Raises:
        UnauthorizedException: If the request is anonymous
        UserNotFoundException: If the user vanished after synchronization
    """
    if identity is None:
        raise UnauthorizedException("Authentication required")

    user = await user_repo.get_by_id(db, identity.user_id)
    if not user:
        raise UserNotFoundException()

    return user


def require_roles(*roles: Role):
    """
    Dependency factory for role checks.

    Usage:
        @router.get("/", dependencies=[Depends(require_roles(Role.ADMIN))])
    """
    allowed = frozenset(roles)
    names = ", ".join(sorted(role.value for role in allowed))

    async def check_role(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise ForbiddenException(f"Requires role: {names}")
        return current_user

    return check_role


get_admin_user = require_roles(Role.ADMIN)
get_recruiter_or_admin = require_roles(Role.RECRUITER, Role.ADMIN)
get_job_seeker = require_roles(Role.JOB_SEEKER)
