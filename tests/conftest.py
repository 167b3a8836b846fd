"""
Pytest configuration and shared fixtures.

Every test gets a fresh SQLite database file. Tokens are HS256 and signed
with TEST_SECRET, which the settings below point the verifier at.
"""
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

# Settings are read at import time - configure before importing the app
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["IDP_SHARED_SECRET"] = "test-secret"
os.environ["IDP_ALGORITHMS"] = '["HS256"]'
os.environ["RATE_LIMIT_ENABLED"] = "false"
for _name in ("IDP_JWKS_URL", "IDP_PUBLIC_KEY", "IDP_ISSUER", "IDP_AUDIENCE", "IDP_ROLE_CLAIM"):
    os.environ.pop(_name, None)

import httpx
import pytest
import pytest_asyncio
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import jobnest.models  # noqa: F401  (register tables)
from jobnest.core.database import Base, get_db
from jobnest.core.security import VerifiedToken
from jobnest.main import create_app
from jobnest.models.user import Role, User

TEST_SECRET = "test-secret"


def make_token(
    sub: Optional[str] = "abc",
    expires_in: int = 3600,
    secret: str = TEST_SECRET,
    **claims,
) -> str:
    """Sign a bearer token the way the identity provider would."""
    payload = {"exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in), **claims}
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_header(sub: Optional[str] = "abc", **claims) -> dict:
    return {"Authorization": f"Bearer {make_token(sub, **claims)}"}


def verified(sub: Optional[str] = "abc", **claims) -> VerifiedToken:
    """A token as the verifier would hand it to the synchronizer."""
    all_claims = dict(claims)
    if sub is not None:
        all_claims["sub"] = sub
    return VerifiedToken(subject_id=sub, claims=all_claims)


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File-backed so that concurrent sessions really use separate connections
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory):
    app = create_app(session_factory=session_factory, use_lifespan=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def create_user(session_factory):
    """Insert a user directly, as if it had signed in before."""

    async def _create(subject_id: str, role: Role = Role.JOB_SEEKER, **fields) -> User:
        async with session_factory() as session:
            user = User(subject_id=subject_id, role=role, **fields)
            session.add(user)
            await session.commit()
            return user

    return _create
