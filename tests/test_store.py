"""
Tests for the account stores.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from auth.models import Account
from auth.store import InMemoryAccountStore
from database.accounts import SqlAccountStore
from database.models import AccountRecord

ALICE = Account(username="alice", email="a@x.com", password_hash="$2b$04$hash")


def _session_factory(session: MagicMock) -> MagicMock:
    """Mimic ``async_sessionmaker``: calling it yields an async context manager."""
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


class TestInMemoryAccountStore:
    @pytest.mark.asyncio
    async def test_insert_then_find(self):
        store = InMemoryAccountStore()
        assert await store.insert_if_absent(ALICE) is True
        assert await store.find_by_username("alice") == ALICE
        assert await store.find_by_username("bob") is None

    @pytest.mark.asyncio
    async def test_second_insert_is_rejected(self):
        store = InMemoryAccountStore()
        await store.insert_if_absent(ALICE)
        other = Account(username="alice", email="b@x.com", password_hash="x")
        assert await store.insert_if_absent(other) is False
        assert (await store.find_by_username("alice")).email == "a@x.com"
        assert len(store) == 1


class TestSqlAccountStore:
    @pytest.mark.asyncio
    async def test_find_maps_record(self):
        result = MagicMock()
        result.scalar_one_or_none.return_value = AccountRecord(
            username="alice", email="a@x.com", password_hash="$2b$04$hash"
        )
        session = MagicMock()
        session.execute = AsyncMock(return_value=result)

        store = SqlAccountStore(_session_factory(session))
        assert await store.find_by_username("alice") == ALICE
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_find_missing(self):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session = MagicMock()
        session.execute = AsyncMock(return_value=result)

        store = SqlAccountStore(_session_factory(session))
        assert await store.find_by_username("nobody") is None

    @pytest.mark.asyncio
    async def test_insert_commits(self):
        session = MagicMock()
        session.commit = AsyncMock()
        session.rollback = AsyncMock()

        store = SqlAccountStore(_session_factory(session))
        assert await store.insert_if_absent(ALICE) is True

        added = session.add.call_args.args[0]
        assert isinstance(added, AccountRecord)
        assert added.username == "alice"
        assert added.password_hash == ALICE.password_hash
        session.commit.assert_awaited_once()
        session.rollback.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_returns_false(self):
        session = MagicMock()
        session.commit = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("duplicate key"))
        )
        session.rollback = AsyncMock()

        store = SqlAccountStore(_session_factory(session))
        assert await store.insert_if_absent(ALICE) is False
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        session = MagicMock()
        session.commit = AsyncMock(side_effect=ConnectionError("db down"))
        session.rollback = AsyncMock()

        store = SqlAccountStore(_session_factory(session))
        with pytest.raises(ConnectionError):
            await store.insert_if_absent(ALICE)
