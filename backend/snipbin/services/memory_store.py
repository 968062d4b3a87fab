"""
SnipBin Backend: In-Memory Snippet Store
==========================================

What:  SnippetStore kept in a plain dict.
Who:   Tests, and local runs with STORE_BACKEND=memory.

Contents live as long as the process. There is no await between the
existence check and the write in insert_if_absent(), so on a single event
loop the check-then-insert is atomic.
"""

import logging
from datetime import datetime, timezone
from typing import Dict

from snipbin.exceptions import NotFoundError
from snipbin.schemas.snippet import InsertResult, SnippetRecord
from snipbin.services.store_base import SnippetStore

logger = logging.getLogger(__name__)


class MemorySnippetStore(SnippetStore):

    def __init__(self):
        self._snippets: Dict[str, SnippetRecord] = {}

    def __len__(self) -> int:
        return len(self._snippets)

    def _get(self, key: str) -> SnippetRecord:
        snippet = self._snippets.get(key)
        if snippet is None:
            raise NotFoundError(resource="snippet", resource_id=key)
        return snippet

    async def insert_if_absent(self, key: str, content: str) -> InsertResult:
        existing = self._snippets.get(key)
        if existing is not None:
            return InsertResult(created=False, snippet=existing)

        snippet = SnippetRecord(
            key=key,
            content=content,
            created_at=datetime.now(timezone.utc),
            view_count=0,
        )
        self._snippets[key] = snippet
        logger.debug("Stored snippet %s in memory (%d total)", key, len(self._snippets))
        return InsertResult(created=True, snippet=snippet)

    async def fetch_and_touch(self, key: str) -> SnippetRecord:
        snippet = self._get(key)
        touched = snippet.model_copy(update={"view_count": snippet.view_count + 1})
        self._snippets[key] = touched
        return touched

    async def fetch_raw(self, key: str) -> SnippetRecord:
        return self._get(key)

    async def ping(self) -> bool:
        return True
