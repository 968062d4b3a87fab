"""
SnipBin Backend: Request Dependencies
=======================================

What:  FastAPI dependency that hands each request its snippet store.
Why:   Handlers never reach for a global connection; the store is injected,
       and tests swap it with app.dependency_overrides.

    STORE_BACKEND=sql     → SqlSnippetStore over the request's session
    STORE_BACKEND=memory  → the MemorySnippetStore created by create_app()
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from snipbin.database import get_db_session
from snipbin.services.sql_store import SqlSnippetStore
from snipbin.services.store_base import SnippetStore


async def get_snippet_store(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> SnippetStore:
    # Sessions connect lazily, so an unused one costs nothing in memory mode
    memory_store = getattr(request.app.state, "memory_store", None)
    if memory_store is not None:
        return memory_store
    return SqlSnippetStore(db)
