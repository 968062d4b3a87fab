"""
SnipBin Backend: Snippet Store Tests
======================================

What:  The SnippetStore contract, run against both implementations, plus
       the SQL store's race and failure handling.
How:   SqlSnippetStore runs on a throwaway SQLite file (aiosqlite); failure
       paths use a mocked AsyncSession.

What we test:
    ✅ insert_if_absent creates once, then returns the existing snippet untouched
    ✅ fetch_and_touch adds exactly one view per call
    ✅ fetch_raw never changes view_count
    ✅ Unknown keys raise NotFoundError
    ✅ A lost insert race is reported as created=False
    ✅ Storage failures raise PersistenceError
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from snipbin.exceptions import NotFoundError, PersistenceError
from snipbin.schemas.snippet import SnippetRecord
from snipbin.services.memory_store import MemorySnippetStore
from snipbin.services.sql_store import SqlSnippetStore

KEY = "5d41402abc4b2a76b9719d911017c592"


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, sqlite_factory):
    if request.param == "memory":
        yield MemorySnippetStore()
        return

    async with sqlite_factory() as session:
        yield SqlSnippetStore(session)
        await session.commit()


class TestStoreContract:

    @pytest.mark.asyncio
    async def test_insert_new_key(self, store):
        result = await store.insert_if_absent(KEY, "print('hi')")

        assert result.created is True
        assert result.snippet.key == KEY
        assert result.snippet.content == "print('hi')"
        assert result.snippet.view_count == 0
        assert result.snippet.created_at is not None

    @pytest.mark.asyncio
    async def test_insert_existing_key_is_idempotent(self, store):
        first = await store.insert_if_absent(KEY, "print('hi')")
        second = await store.insert_if_absent(KEY, "something else")

        assert second.created is False
        assert second.snippet.content == "print('hi')"
        assert second.snippet.created_at == first.snippet.created_at

        stored = await store.fetch_raw(KEY)
        assert stored.content == "print('hi')"

    @pytest.mark.asyncio
    async def test_fetch_and_touch_increments_by_one(self, store):
        await store.insert_if_absent(KEY, "x")

        assert (await store.fetch_and_touch(KEY)).view_count == 1
        assert (await store.fetch_and_touch(KEY)).view_count == 2
        assert (await store.fetch_and_touch(KEY)).view_count == 3

    @pytest.mark.asyncio
    async def test_fetch_raw_has_no_side_effects(self, store):
        await store.insert_if_absent(KEY, "x")
        await store.fetch_and_touch(KEY)

        for _ in range(3):
            assert (await store.fetch_raw(KEY)).view_count == 1

    @pytest.mark.asyncio
    async def test_touch_does_not_change_content(self, store):
        await store.insert_if_absent(KEY, "return 42")
        touched = await store.fetch_and_touch(KEY)
        assert touched.content == "return 42"

    @pytest.mark.asyncio
    async def test_unknown_key_raises_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.fetch_and_touch("doesnotexist")
        with pytest.raises(NotFoundError):
            await store.fetch_raw("doesnotexist")

    @pytest.mark.asyncio
    async def test_ping(self, store):
        assert await store.ping() is True


class TestSnippetRecordTimestamps:

    def test_naive_created_at_is_read_as_utc(self):
        record = SnippetRecord(key=KEY, content="x", created_at=datetime(2024, 1, 1, 12, 0), view_count=0)
        assert record.created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_aware_created_at_is_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        record = SnippetRecord(
            key=KEY, content="x", created_at=datetime(2024, 1, 1, 14, 0, tzinfo=plus_two), view_count=0
        )
        assert record.created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
        assert record.created_at.tzinfo is timezone.utc

    @pytest.mark.asyncio
    async def test_sql_reads_are_timezone_aware(self, sqlite_factory):
        async with sqlite_factory() as session:
            await SqlSnippetStore(session).insert_if_absent(KEY, "x")
            await session.commit()

        async with sqlite_factory() as session:
            snippet = await SqlSnippetStore(session).fetch_raw(KEY)
        assert snippet.created_at.tzinfo is not None


class TestSqlStoreConcurrency:

    @pytest.mark.asyncio
    async def test_views_persist_across_sessions(self, sqlite_factory):
        async with sqlite_factory() as session:
            await SqlSnippetStore(session).insert_if_absent(KEY, "x")
            await session.commit()

        for _ in range(2):
            async with sqlite_factory() as session:
                await SqlSnippetStore(session).fetch_and_touch(KEY)
                await session.commit()

        async with sqlite_factory() as session:
            snippet = await SqlSnippetStore(session).fetch_raw(KEY)
        assert snippet.view_count == 2

    @pytest.mark.asyncio
    async def test_lost_insert_race_reports_existing(self, sqlite_factory):
        """Both requests miss the lookup; the UNIQUE constraint picks the winner."""
        async with sqlite_factory() as session:
            await SqlSnippetStore(session).insert_if_absent(KEY, "winner")
            await session.commit()

        async with sqlite_factory() as session:
            store = SqlSnippetStore(session)
            real_find = store._find
            lookups = []

            async def find_missing_first(key):
                lookups.append(key)
                if len(lookups) == 1:
                    return None
                return await real_find(key)

            store._find = find_missing_first
            result = await store.insert_if_absent(KEY, "loser")

        assert result.created is False
        assert result.snippet.content == "winner"
        assert len(lookups) == 2


class TestSqlStoreFailures:

    @pytest.mark.asyncio
    async def test_insert_storage_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))

        with pytest.raises(PersistenceError):
            await SqlSnippetStore(mock_db_session).insert_if_absent(KEY, "x")

    @pytest.mark.asyncio
    async def test_fetch_and_touch_storage_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = ConnectionRefusedError("db down")

        with pytest.raises(PersistenceError):
            await SqlSnippetStore(mock_db_session).fetch_and_touch(KEY)

    @pytest.mark.asyncio
    async def test_fetch_raw_storage_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = ConnectionRefusedError("db down")

        with pytest.raises(PersistenceError):
            await SqlSnippetStore(mock_db_session).fetch_raw(KEY)

    @pytest.mark.asyncio
    async def test_flush_failure_on_touch(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = MagicMock(view_count=0)
        mock_db_session.execute.return_value = result
        mock_db_session.flush.side_effect = OperationalError("UPDATE", {}, Exception("locked"))

        with pytest.raises(PersistenceError):
            await SqlSnippetStore(mock_db_session).fetch_and_touch(KEY)

    @pytest.mark.asyncio
    async def test_not_found_is_not_wrapped(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result

        with pytest.raises(NotFoundError):
            await SqlSnippetStore(mock_db_session).fetch_raw("doesnotexist")

    @pytest.mark.asyncio
    async def test_ping_reports_unreachable(self, mock_db_session):
        mock_db_session.execute.side_effect = ConnectionRefusedError("db down")
        assert await SqlSnippetStore(mock_db_session).ping() is False
