"""Tests for the request identity gate and its middleware."""

import httpx
import pytest
import pytest_asyncio
from fastapi import Depends, FastAPI

from jobnest.api.deps import get_security_context, get_synced_identity
from jobnest.api.gate import IdentityGateMiddleware, RequestIdentityGate
from jobnest.core.config import settings
from jobnest.core.database import get_db
from jobnest.core.exceptions import (
    IdentityProviderUnavailableException,
    StoreUnavailableException,
)
from jobnest.core.security import SecurityContext, TokenVerifier
from jobnest.main import create_app
from jobnest.models.user import Role
from jobnest.services.user_synchronizer import UserSynchronizer
from tests.conftest import auth_header, make_token, verified


def no_store():
    raise AssertionError("the user store must not be touched")


class CountingSynchronizer(UserSynchronizer):
    """Real synchronizer that remembers which subjects it synchronized."""

    def __init__(self):
        super().__init__(settings)
        self.subjects = []

    async def synchronize_with_idp(self, db, token):
        self.subjects.append(token.subject_id)
        return await super().synchronize_with_idp(db, token)


class UnavailableSynchronizer(UserSynchronizer):
    async def synchronize_with_idp(self, db, token):
        raise StoreUnavailableException()


class UnreachableProviderVerifier(TokenVerifier):
    async def verify(self, raw_token):
        raise IdentityProviderUnavailableException()


def build_probe_app(gate: RequestIdentityGate, verifier: TokenVerifier = None):
    """A bare app with the gate in front of one route that records its calls."""
    app = FastAPI()
    app.state.calls = []
    app.add_middleware(
        IdentityGateMiddleware,
        gate=gate,
        verifier=verifier or TokenVerifier(settings),
    )

    @app.get("/probe")
    async def probe(
        context: SecurityContext = Depends(get_security_context),
        identity=Depends(get_synced_identity),
    ):
        app.state.calls.append(context)
        return {
            "authenticated": context.is_authenticated,
            "subject_id": context.subject_id,
            "role": identity.role.value if identity else None,
        }

    return app


@pytest_asyncio.fixture
async def probe_client():
    """Factory for clients talking to a probe app."""
    clients = []

    async def _client(app):
        client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _client
    for client in clients:
        await client.aclose()


class TestRequestIdentityGate:
    """RequestIdentityGate.process."""

    async def test_anonymous_skips_store(self):
        gate = RequestIdentityGate(CountingSynchronizer(), no_store)

        assert await gate.process(SecurityContext.anonymous()) is None
        assert gate.synchronizer.subjects == []

    async def test_authenticated_synchronizes(self, session_factory):
        gate = RequestIdentityGate(CountingSynchronizer(), session_factory)

        identity = await gate.process(
            SecurityContext.authenticated(verified("abc", email="a@x.com"))
        )

        assert identity.subject_id == "abc"
        assert identity.role == Role.JOB_SEEKER
        assert gate.synchronizer.subjects == ["abc"]


class TestIdentityGateMiddleware:
    """The gate as a pipeline hook."""

    async def test_anonymous_passes_through_without_store(self, probe_client):
        synchronizer = CountingSynchronizer()
        app = build_probe_app(RequestIdentityGate(synchronizer, no_store))
        client = await probe_client(app)

        response = await client.get("/probe")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "subject_id": None, "role": None}
        assert synchronizer.subjects == []
        assert len(app.state.calls) == 1

    async def test_authenticated_request_forwarded_with_identity(
        self, probe_client, session_factory
    ):
        app = build_probe_app(RequestIdentityGate(CountingSynchronizer(), session_factory))
        client = await probe_client(app)

        response = await client.get("/probe", headers=auth_header("abc", email="a@x.com"))

        assert response.status_code == 200
        assert response.json() == {
            "authenticated": True,
            "subject_id": "abc",
            "role": "job_seeker",
        }

    async def test_store_unavailable_fails_closed(self, probe_client, session_factory):
        """Synchronization failure rejects the request before the route runs."""
        app = build_probe_app(RequestIdentityGate(UnavailableSynchronizer(settings), session_factory))
        client = await probe_client(app)

        response = await client.get("/probe", headers=auth_header("abc"))

        assert response.status_code == 503
        assert response.json()["error"] == "STORE_UNAVAILABLE"
        assert app.state.calls == []

    async def test_malformed_claims_rejected(self, probe_client, session_factory):
        app = build_probe_app(RequestIdentityGate(CountingSynchronizer(), session_factory))
        client = await probe_client(app)

        response = await client.get("/probe", headers=auth_header(None, email="a@x.com"))

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json() == {
            "error": "MALFORMED_CLAIMS",
            "message": "Token is missing required claim 'sub'",
            "details": {"claim": "sub"},
        }
        assert app.state.calls == []

    @pytest.mark.parametrize("header, code", [
        ("Bearer not-a-jwt", "INVALID_TOKEN"),
        (f"Bearer {make_token('abc', secret='wrong')}", "INVALID_TOKEN"),
        (f"Bearer {make_token('abc', expires_in=-60)}", "TOKEN_EXPIRED"),
        ("Bearer ", "INVALID_TOKEN"),
    ])
    async def test_bad_tokens_never_anonymous(self, probe_client, header, code):
        """A presented but unusable token is rejected, not downgraded."""
        app = build_probe_app(RequestIdentityGate(CountingSynchronizer(), no_store))
        client = await probe_client(app)

        response = await client.get("/probe", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json()["error"] == code
        assert app.state.calls == []

    async def test_provider_unreachable(self, probe_client):
        app = build_probe_app(
            RequestIdentityGate(CountingSynchronizer(), no_store),
            verifier=UnreachableProviderVerifier(settings),
        )
        client = await probe_client(app)

        response = await client.get("/probe", headers=auth_header("abc"))

        assert response.status_code == 503
        assert response.json()["error"] == "IDP_UNAVAILABLE"


class TestGateInApplication:
    """The gate wired into the full application."""

    async def test_synchronizes_once_per_request(self, session_factory, create_user):
        """Stacked role checks read the gate's result instead of re-syncing."""
        await create_user("rec-1", role=Role.RECRUITER)
        synchronizer = CountingSynchronizer()
        app = create_app(
            session_factory=session_factory,
            synchronizer=synchronizer,
            use_lifespan=False,
        )

        async def override_get_db():
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_db] = override_get_db
        transport = httpx.ASGITransport(app=app)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/v1/companies",
                json={"name": "Acme", "description": "Anvils and rockets"},
                headers=auth_header("rec-1"),
            )

        assert response.status_code == 201
        assert synchronizer.subjects == ["rec-1"]

    async def test_public_route_with_token_still_synchronizes(self, client):
        """Signing in on any route provisions the user."""
        response = await client.get("/api/v1/jobs", headers=auth_header("new-user", email="n@x.com"))
        assert response.status_code == 200

        me = await client.get("/api/v1/users/me", headers=auth_header("new-user"))
        assert me.json()["email"] == "n@x.com"

    async def test_oversized_claims_never_reach_the_store(self, client):
        """Long names are cut to fit; an unstorable subject id is a 401."""
        long_name = await client.get(
            "/api/v1/users/me",
            headers=auth_header("abc", given_name="x" * 101),
        )
        assert long_name.status_code == 200
        assert long_name.json()["first_name"] == "x" * 100

        long_subject = await client.get("/api/v1/jobs", headers=auth_header("s" * 256))
        assert long_subject.status_code == 401
        assert long_subject.json()["error"] == "MALFORMED_CLAIMS"
