"""
SnipBin Backend: Snippet Service (Business Logic Orchestrator)
================================================================

What:  Coordinates validate → key → insert for uploads, and the two
       retrieval flows.
Why:   Keeps business rules out of route handlers and out of the stores.
How:   Receives the store handle for each call; holds no per-request state.

Orchestration Flow (POST /upload):
    ┌──────────┐    ┌────────────┐    ┌──────────────┐    ┌──────────────────┐
    │  Upload  │───▶│  Validate  │───▶│ compute_key  │───▶│ insert_if_absent │
    │  (Route) │    │  content   │    │ (Identifier) │    │     (Store)      │
    └──────────┘    └────────────┘    └──────────────┘    └──────────────────┘

Retrieval:
    view(): fetch_and_touch  (GET /paste/{key}, counts a view)
    raw():  fetch_raw        (GET /raw/{key}, no side effects)
"""

import logging
from typing import Optional

from snipbin.config import settings
from snipbin.exceptions import ValidationError
from snipbin.schemas.snippet import InsertResult, SnippetRecord
from snipbin.services.identifier import IdentifierService, identifier_service
from snipbin.services.store_base import SnippetStore

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "No code provided"


class SnippetService:
    """
    Business logic layer for snippet operations.

    Responsibilities:
        - submit(): upload workflow with content validation
        - view():   retrieval for the paste page (increments view_count)
        - raw():    side-effect-free retrieval

    Store errors (NotFoundError, PersistenceError) propagate unchanged to the
    global exception handlers.
    """

    def __init__(
        self,
        identifiers: Optional[IdentifierService] = None,
        max_content_bytes: Optional[int] = None,
    ):
        self.identifiers = identifiers or identifier_service
        self.max_content_bytes = max_content_bytes or settings.max_content_bytes

    def validate_content(self, content: Optional[str]) -> str:
        """
        Reject missing, blank or oversized content.

        Returns the content unchanged; whitespace is only trimmed for the
        emptiness check, never in what gets stored.
        """
        if content is None or not content.strip():
            raise ValidationError(message=NO_CONTENT_MESSAGE, field="code")

        size = len(content.encode("utf-8"))
        if size > self.max_content_bytes:
            raise ValidationError(
                message=(
                    f"Snippet is too large ({size} bytes). "
                    f"Maximum size is {self.max_content_bytes} bytes"
                ),
                field="code",
                context={"size": size, "max_size": self.max_content_bytes},
            )
        return content

    async def submit(self, store: SnippetStore, content: Optional[str]) -> InsertResult:
        """
        Store submitted content and report whether it was new.

        Raises:
            ValidationError: no usable content (→ 400)
            PersistenceError: storage failed (→ 500)
        """
        content = self.validate_content(content)
        key = self.identifiers.compute_key(content)
        result = await store.insert_if_absent(key, content)

        if result.created:
            logger.info("Snippet %s stored (%d chars)", key, len(content))
        else:
            logger.info("Snippet %s already exists", key)
        return result

    async def view(self, store: SnippetStore, key: str) -> SnippetRecord:
        return await store.fetch_and_touch(key)

    async def raw(self, store: SnippetStore, key: str) -> SnippetRecord:
        return await store.fetch_raw(key)


snippet_service = SnippetService()
