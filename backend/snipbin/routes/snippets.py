"""
SnipBin Backend: Snippet Retrieval Routes
===========================================

What:  GET /paste/{key} (viewer or raw, counts a view) and
       GET /raw/{key} (always raw, no side effects).
Who:   /paste links are what POST /upload hands out; script runtimes fetch
       them directly, browsers get the viewer page.

    GET /paste/{key}
        fetch_and_touch → dispatch policy → text/plain | viewer page
    GET /raw/{key}
        fetch_raw → text/plain

Unknown keys answer 404 "Snippet not found" via the global handler.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import PlainTextResponse, Response

from snipbin.config import settings
from snipbin.dependencies import get_snippet_store
from snipbin.services.dispatch import RetrievalMode, choose_mode, classify_client
from snipbin.services.snippet_service import snippet_service
from snipbin.services.store_base import SnippetStore
from snipbin.services.viewer import viewer_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Snippets"])


@router.get(
    "/paste/{key}",
    name="view_snippet",
    response_class=Response,
    responses={
        200: {
            "description": "Snippet text for script callers, viewer page otherwise",
            "content": {"text/plain": {}, "text/html": {}},
        },
        404: {"description": "Snippet not found", "content": {"text/plain": {}}},
    },
    summary="View a snippet",
)
async def view_snippet(
    key: str,
    raw: Optional[str] = Query(
        default=None,
        description="'true' forces a plain-text response; any other value is ignored",
    ),
    x_client_type: Optional[str] = Header(
        default=None,
        description="Declared caller kind: 'script' or 'interactive'",
    ),
    user_agent: Optional[str] = Header(default=None),
    store: SnippetStore = Depends(get_snippet_store),
) -> Response:
    """
    Every successful hit counts as a view, whichever representation is sent.
    """
    snippet = await snippet_service.view(store, key)

    client = classify_client(x_client_type, user_agent, settings.script_clients_list)
    mode = choose_mode(raw == "true", client)
    logger.debug("Snippet %s requested by %s client, serving %s", key, client.value, mode.value)

    if mode is RetrievalMode.RAW:
        return PlainTextResponse(snippet.content)
    return viewer_response(snippet)


@router.get(
    "/raw/{key}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Snippet text", "content": {"text/plain": {}}},
        404: {"description": "Snippet not found", "content": {"text/plain": {}}},
    },
    summary="Raw snippet text",
)
async def raw_snippet(
    key: str,
    store: SnippetStore = Depends(get_snippet_store),
) -> PlainTextResponse:
    snippet = await snippet_service.raw(store, key)
    # Content never changes after creation
    return PlainTextResponse(
        snippet.content,
        headers={"Cache-Control": "public, max-age=3600"},
    )
