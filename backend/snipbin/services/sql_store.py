"""
SnipBin Backend: SQL Snippet Store
====================================

What:  SnippetStore backed by an async SQLAlchemy session.
Who:   Built per request by snipbin.dependencies.get_snippet_store().
When:  Every upload and retrieval when STORE_BACKEND=sql (the default).

Uniqueness:
    The UNIQUE constraint on snippets.key is the only arbiter. Two requests
    can both miss the existence check and both INSERT; the loser's flush
    raises IntegrityError, which is rolled back and answered with the
    winner's row as created=False.

Transactions:
    The store only flushes. Commit/rollback belongs to get_db_session(),
    which wraps the whole request.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snipbin.exceptions import NotFoundError, PersistenceError
from snipbin.models.snippet import Snippet
from snipbin.schemas.snippet import InsertResult, SnippetRecord
from snipbin.services.store_base import SnippetStore

logger = logging.getLogger(__name__)


class SqlSnippetStore(SnippetStore):
    """SnippetStore over one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find(self, key: str) -> Optional[Snippet]:
        result = await self.db.execute(select(Snippet).where(Snippet.key == key))
        return result.scalar_one_or_none()

    async def insert_if_absent(self, key: str, content: str) -> InsertResult:
        try:
            existing = await self._find(key)
            if existing is not None:
                return InsertResult(
                    created=False,
                    snippet=SnippetRecord.model_validate(existing),
                )

            snippet = Snippet(
                key=key,
                content=content,
                created_at=datetime.now(timezone.utc),
                view_count=0,
            )
            self.db.add(snippet)
            try:
                await self.db.flush()
            except IntegrityError:
                # Lost the insert race; the row that won is the answer.
                await self.db.rollback()
                winner = await self._find(key)
                if winner is None:
                    raise
                logger.info("Concurrent insert for key %s; reusing existing snippet", key)
                return InsertResult(
                    created=False,
                    snippet=SnippetRecord.model_validate(winner),
                )

            return InsertResult(created=True, snippet=SnippetRecord.model_validate(snippet))

        except Exception as e:
            logger.error("Database error inserting snippet %s: %s", key, str(e), exc_info=True)
            raise PersistenceError(
                message="Could not store the snippet.",
                context={"key": key, "error_type": type(e).__name__},
            ) from e

    async def fetch_and_touch(self, key: str) -> SnippetRecord:
        try:
            snippet = await self._find(key)
            if snippet is None:
                raise NotFoundError(resource="snippet", resource_id=key)

            # Incremented in SQL so the database computes the new value
            snippet.view_count = Snippet.view_count + 1
            await self.db.flush()
            await self.db.refresh(snippet)
            return SnippetRecord.model_validate(snippet)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching snippet %s: %s", key, str(e))
            raise PersistenceError(
                message="Could not retrieve the snippet.",
                context={"key": key, "error_type": type(e).__name__},
            ) from e

    async def fetch_raw(self, key: str) -> SnippetRecord:
        try:
            snippet = await self._find(key)
            if snippet is None:
                raise NotFoundError(resource="snippet", resource_id=key)
            return SnippetRecord.model_validate(snippet)

        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching raw snippet %s: %s", key, str(e))
            raise PersistenceError(
                message="Could not retrieve the snippet.",
                context={"key": key, "error_type": type(e).__name__},
            ) from e

    async def ping(self) -> bool:
        try:
            await self.db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Snippet store unreachable: %s", str(e))
            return False
