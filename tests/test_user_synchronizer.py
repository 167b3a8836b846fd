"""Tests for reconciling provider identities with the user store."""

import asyncio

import pytest
from sqlalchemy import event, func, select
from sqlalchemy.exc import OperationalError

from jobnest.core.config import settings
from jobnest.core.exceptions import MalformedClaimsException, StoreUnavailableException
from jobnest.models.user import Role, User
from jobnest.services.user_synchronizer import UserSynchronizer
from tests.conftest import verified


@pytest.fixture
def synchronizer() -> UserSynchronizer:
    return UserSynchronizer(settings)


@pytest.fixture
def sync(session_factory, synchronizer):
    """Run one synchronization in its own session, like the gate does."""

    async def _sync(token, synchronizer=synchronizer):
        async with session_factory() as session:
            return await synchronizer.synchronize_with_idp(session, token)

    return _sync


@pytest.fixture
def load_user(session_factory):
    async def _load(subject_id: str) -> User:
        async with session_factory() as session:
            result = await session.execute(select(User).where(User.subject_id == subject_id))
            return result.scalar_one()

    return _load


@pytest.fixture
def count_users(session_factory):
    async def _count() -> int:
        async with session_factory() as session:
            return await session.scalar(select(func.count()).select_from(User))

    return _count


@pytest.fixture
def write_statements(engine):
    """Collects every INSERT/UPDATE/DELETE sent to the database."""
    statements = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(("INSERT", "UPDATE", "DELETE")):
            statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _record)
    yield statements
    event.remove(engine.sync_engine, "before_cursor_execute", _record)


class TestScenarios:
    """The three basic synchronization scenarios."""

    async def test_first_sign_in_creates_user(self, sync, load_user):
        """Unknown subject on an empty store -> a new user."""
        user = await sync(verified("abc", email="a@x.com"))

        assert user.subject_id == "abc"
        assert user.email == "a@x.com"
        stored = await load_user("abc")
        assert stored.id == user.id
        assert stored.email == "a@x.com"

    async def test_replay_keeps_profile_edits(self, sync, load_user, session_factory):
        """Profile fields edited locally survive the next synchronization."""
        await sync(verified("abc", email="a@x.com"))

        async with session_factory() as session:
            user = (await session.execute(select(User).where(User.subject_id == "abc"))).scalar_one()
            user.resume = "https://cv.example.com/abc.pdf"
            user.skills = ["python", "sql"]
            await session.commit()

        await sync(verified("abc", email="a@x.com"))

        stored = await load_user("abc")
        assert stored.resume == "https://cv.example.com/abc.pdf"
        assert stored.skills == ["python", "sql"]
        assert stored.email == "a@x.com"

    async def test_changed_email_is_written_back(self, sync, load_user):
        await sync(verified("abc", email="a@x.com"))
        await sync(verified("abc", email="b@x.com"))

        assert (await load_user("abc")).email == "b@x.com"


class TestIdempotence:
    """Replaying identical claims is a no-op."""

    async def test_replay_writes_nothing(self, sync, load_user, write_statements):
        token = verified("abc", email="a@x.com", given_name="Ada", family_name="Byron")
        await sync(token)
        before = await load_user("abc")
        write_statements.clear()

        await sync(token)
        await sync(token)

        after = await load_user("abc")
        assert write_statements == []
        assert after.updated_at == before.updated_at
        assert (after.email, after.first_name, after.last_name) == ("a@x.com", "Ada", "Byron")

    async def test_only_drifted_fields_written(self, sync, load_user):
        await sync(verified("abc", email="a@x.com", given_name="Ada"))
        await sync(verified("abc", email="a@x.com", given_name="Augusta"))

        stored = await load_user("abc")
        assert stored.first_name == "Augusta"
        assert stored.email == "a@x.com"

    async def test_absent_claim_keeps_stored_value(self, sync, load_user):
        await sync(verified("abc", email="a@x.com", given_name="Ada"))
        await sync(verified("abc", given_name="Ada"))

        assert (await load_user("abc")).email == "a@x.com"


class TestRoles:
    """Role assignment on creation."""

    async def test_default_role(self, sync):
        user = await sync(verified("abc"))
        assert user.role == Role.JOB_SEEKER

    async def test_configured_default_role(self, sync):
        config = settings.model_copy(update={"default_user_role": "recruiter"})
        user = await sync(verified("abc"), synchronizer=UserSynchronizer(config))
        assert user.role == Role.RECRUITER

    async def test_role_claim_applied_on_create_only(self, sync, load_user):
        config = settings.model_copy(update={"idp_role_claim": "roles"})
        synchronizer = UserSynchronizer(config)

        user = await sync(verified("abc", roles=["recruiter"]), synchronizer=synchronizer)
        assert user.role == Role.RECRUITER

        await sync(verified("abc", roles=["admin"]), synchronizer=synchronizer)
        assert (await load_user("abc")).role == Role.RECRUITER


class TestConcurrency:
    """Parallel first requests for one subject."""

    async def test_parallel_first_requests_create_one_user(self, sync, count_users):
        token = verified("abc", email="a@x.com")

        users = await asyncio.gather(*(sync(token) for _ in range(5)))

        assert len({user.id for user in users}) == 1
        assert await count_users() == 1

    async def test_conflict_falls_back_to_update(
        self, sync, synchronizer, create_user, load_user, count_users, monkeypatch
    ):
        """Losing the insert race re-reads and reconciles the winner's row."""
        existing = await create_user("abc", email="a@x.com")

        original = synchronizer.user_repo.get_by_subject_id
        calls = []

        async def stale_first_read(db, subject_id):
            calls.append(subject_id)
            if len(calls) == 1:
                return None  # the other request hasn't committed yet
            return await original(db, subject_id)

        monkeypatch.setattr(synchronizer.user_repo, "get_by_subject_id", stale_first_read)

        user = await sync(verified("abc", email="b@x.com"))

        assert user.id == existing.id
        assert len(calls) == 2
        assert await count_users() == 1
        assert (await load_user("abc")).email == "b@x.com"

    async def test_gives_up_after_max_attempts(
        self, sync, synchronizer, create_user, monkeypatch
    ):
        await create_user("abc")

        async def never_found(db, subject_id):
            return None

        monkeypatch.setattr(synchronizer.user_repo, "get_by_subject_id", never_found)

        with pytest.raises(StoreUnavailableException):
            await sync(verified("abc"))


class TestFailures:
    """Errors surfaced to the gate."""

    async def test_malformed_claims(self, sync, count_users):
        with pytest.raises(MalformedClaimsException):
            await sync(verified(None, email="a@x.com"))
        assert await count_users() == 0

    async def test_store_unreachable(self, sync, synchronizer, monkeypatch):
        async def unreachable(db, subject_id):
            raise OperationalError("SELECT", {}, ConnectionRefusedError("connection refused"))

        monkeypatch.setattr(synchronizer.user_repo, "get_by_subject_id", unreachable)

        with pytest.raises(StoreUnavailableException) as exc_info:
            await sync(verified("abc"))
        assert exc_info.value.status_code == 503

    async def test_timeout_is_store_unavailable(self, sync, synchronizer, monkeypatch):
        async def slow(db, subject_id):
            raise asyncio.TimeoutError()

        monkeypatch.setattr(synchronizer.user_repo, "get_by_subject_id", slow)

        with pytest.raises(StoreUnavailableException):
            await sync(verified("abc"))

    async def test_failed_update_leaves_no_partial_write(
        self, sync, synchronizer, load_user, monkeypatch
    ):
        """A failure mid-update rolls the whole attempt back."""
        await sync(verified("abc", email="a@x.com", given_name="Ada"))

        async def broken_update(db, obj, **kwargs):
            for name, value in kwargs.items():
                setattr(obj, name, value)
            raise OperationalError("UPDATE", {}, ConnectionResetError("reset"))

        monkeypatch.setattr(synchronizer.user_repo, "update", broken_update)

        with pytest.raises(StoreUnavailableException):
            await sync(verified("abc", email="b@x.com", given_name="Augusta"))

        stored = await load_user("abc")
        assert (stored.email, stored.first_name) == ("a@x.com", "Ada")
