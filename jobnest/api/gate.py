"""
Request identity gate.

Runs once per request, before any route or role check:

    Start -> Anonymous                      -> forwarded untouched
          -> Authenticated -> Synchronizing -> Forwarded (local user is current)
                                            -> Rejected  (401 / 503)

A request that presented a token is never forwarded as anonymous, and never
forwarded when synchronization failed.
"""
from typing import Callable, Optional

from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import ASGIApp

from jobnest.core.exceptions import APIException
from jobnest.core.logging import bind_subject, get_logger
from jobnest.core.security import SecurityContext, TokenVerifier
from jobnest.schemas.identity import SyncedIdentity
from jobnest.services.user_synchronizer import UserSynchronizer

logger = get_logger(__name__)


class RequestIdentityGate:
    """Synchronizes the caller's local user record, if there is a caller."""

    def __init__(
        self,
        synchronizer: UserSynchronizer,
        session_factory: Callable[[], AsyncSession],
    ):
        self.synchronizer = synchronizer
        self.session_factory = session_factory

    async def process(self, context: SecurityContext) -> Optional[SyncedIdentity]:
        """
        Returns None for anonymous requests (without touching the store),
        otherwise the synchronized identity.

        Raises:
            MalformedClaimsException: Token without a subject id.
            StoreUnavailableException: User store unreachable.
        """
        if not context.is_authenticated:
            return None

        async with self.session_factory() as db:
            user = await self.synchronizer.synchronize_with_idp(db, context.token)
            return SyncedIdentity(
                user_id=user.id,
                subject_id=user.subject_id,
                role=user.role,
            )


class IdentityGateMiddleware(BaseHTTPMiddleware):
    """
    Pipeline hook that authenticates the request and runs the gate.

    Leaves `security_context` and `identity` on request.state for the
    dependencies in jobnest.api.deps.
    """

    def __init__(
        self,
        app: ASGIApp,
        gate: RequestIdentityGate,
        verifier: TokenVerifier,
    ):
        super().__init__(app)
        self.gate = gate
        self.verifier = verifier

    async def dispatch(self, request: Request, call_next):
        # Already handled further out (e.g. a mounted sub-application)
        if getattr(request.state, "identity_gate_done", False):
            return await call_next(request)
        request.state.identity_gate_done = True

        try:
            context = await self.verifier.authenticate(request.headers.get("Authorization"))
            if context.is_authenticated and context.subject_id:
                bind_subject(context.subject_id)
            identity = await self.gate.process(context)
        except APIException as exc:
            logger.warning(
                "identity_gate_rejected",
                code=exc.code,
                status_code=exc.status_code,
            )
            return self._reject(exc)

        request.state.security_context = context
        request.state.identity = identity
        return await call_next(request)

    @staticmethod
    def _reject(exc: APIException) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=headers,
        )
