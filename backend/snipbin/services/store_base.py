"""
SnipBin Backend: Abstract Snippet Store Interface
===================================================

What:  Abstract base class defining the contract for snippet persistence.
Why:   Request handlers receive a store handle through dependency injection,
       so the SQL store, the in-memory store and test doubles are
       interchangeable without touching routes or services.
How:   Concrete implementations inherit from SnippetStore.

Implementations:
    - SqlSnippetStore:    async SQLAlchemy session (PostgreSQL / SQLite)
    - MemorySnippetStore: process-local dict (tests, demo runs)
"""

from abc import ABC, abstractmethod

from snipbin.schemas.snippet import InsertResult, SnippetRecord


class SnippetStore(ABC):
    """
    Key → snippet mapping with dedup-on-insert and view tracking.

    Contract:
        - A key maps to at most one snippet, enforced atomically by the store
        - Every failure of the backing storage is raised as PersistenceError
        - Unknown keys are raised as NotFoundError, never returned as None
    """

    @abstractmethod
    async def insert_if_absent(self, key: str, content: str) -> InsertResult:
        """
        Store content under key unless the key already exists.

        Returns:
            InsertResult(created=True, ...) for a new snippet with view_count 0.
            InsertResult(created=False, ...) with the existing, unmodified
            snippet when the key is taken, including when a concurrent insert
            of the same key won the race.

        Raises:
            PersistenceError: storage unreachable or failed.
        """
        ...

    @abstractmethod
    async def fetch_and_touch(self, key: str) -> SnippetRecord:
        """
        Return the snippet after incrementing its view_count by one.

        Raises:
            NotFoundError: no snippet has this key.
            PersistenceError: storage unreachable or failed.
        """
        ...

    @abstractmethod
    async def fetch_raw(self, key: str) -> SnippetRecord:
        """
        Return the snippet without any side effect.

        Raises:
            NotFoundError: no snippet has this key.
            PersistenceError: storage unreachable or failed.
        """
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight reachability check. Never raises."""
        ...
