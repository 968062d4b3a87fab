"""
SnipBin Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment overrides are applied before anything from snipbin is
       imported, so settings and the module-level engine pick them up.

Fixtures:
    ├── mock_db_session:  AsyncMock session (store error paths)
    ├── sqlite_factory:   session factory over a fresh SQLite file per test
    ├── memory_store:     empty MemorySnippetStore
    ├── fixed_clock:      deterministic clock for IdentifierService
    └── test_client:      HTTPX AsyncClient wired to a memory store
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup (must precede snipbin imports)
# ══════════════════════════════════════════════════════════════════════════

_TEST_DIR = tempfile.mkdtemp(prefix="snipbin_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/app.db"
os.environ["STORE_BACKEND"] = "sql"
os.environ["VIEWER_TEMPLATE"] = os.path.join(_TEST_DIR, "missing-paste.html")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from snipbin.database import Base  # noqa: E402
from snipbin.models.snippet import Snippet  # noqa: E402,F401
from snipbin.services.memory_store import MemorySnippetStore  # noqa: E402


class FixedClock:
    """Callable clock returning epoch seconds; advance() moves it forward."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_clock():
    return FixedClock()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OSError("connection refused")
        with pytest.raises(PersistenceError): ...
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def sqlite_factory(tmp_path):
    """
    Session factory over a fresh SQLite database file with the schema created.

    A file (not :memory:) so that separate sessions see each other's
    commits, which the insert-race tests rely on.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/snippets.db")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory

    await engine.dispose()


@pytest.fixture
def memory_store():
    return MemorySnippetStore()


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient talking to a fresh app whose snippet store is
    `memory_store`.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from snipbin.dependencies import get_snippet_store
    from snipbin.main import create_app

    app = create_app()
    app.dependency_overrides[get_snippet_store] = lambda: memory_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
