"""
SnipBin Backend: Upload Route Handler
=======================================

What:  Handles POST /upload for storing a snippet.
How:   Accepts multipart/form-data or application/x-www-form-urlencoded with
       either a `file` field (or its legacy name `luaFile`) or a
       `code` text field, delegates to SnippetService, and answers with
       the retrieval link.

Request Flow:
    1. Take the uploaded file's text if one was sent, else the `code` field
    2. SnippetService validates, computes the key and inserts
    3. Link is built from the request's scheme and host: /paste/<key>

Error responses come from the global handlers:
    400 {"error": "No code provided"}   nothing usable submitted
    500 {"error": "Server error"}       storage failure
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from snipbin.dependencies import get_snippet_store
from snipbin.schemas.snippet import ErrorResponse, UploadResponse
from snipbin.services.snippet_service import snippet_service
from snipbin.services.store_base import SnippetStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])

CREATED_MESSAGE = "Snippet uploaded successfully!"
EXISTING_MESSAGE = "Snippet already exists with this key"


async def _read_upload(file: UploadFile) -> str:
    try:
        data = await file.read()
    finally:
        await file.close()
    # Undecodable bytes become U+FFFD rather than failing the upload
    return data.decode("utf-8", errors="replace")


@router.post(
    "/upload",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses={
        200: {"description": "Snippet stored (or already present)", "model": UploadResponse},
        400: {"description": "No content provided", "model": ErrorResponse},
        500: {"description": "Storage failure", "model": ErrorResponse},
    },
    summary="Store a snippet",
    description=(
        "Upload a file or paste text. Returns an absolute link to the paste page. "
        "The key is derived from the content and the submission time."
    ),
)
async def upload_snippet(
    request: Request,
    file: Optional[UploadFile] = File(default=None, description="Source file to store"),
    lua_file: Optional[UploadFile] = File(
        default=None,
        alias="luaFile",
        description="Source file under the legacy form field name",
    ),
    code: Optional[str] = Form(default=None, description="Pasted source text"),
    store: SnippetStore = Depends(get_snippet_store),
) -> UploadResponse:
    content = code
    if file is None:
        file = lua_file
    if file is not None:
        file_text = await _read_upload(file)
        # Browsers send an empty file part when nothing was selected
        if file_text or not code:
            content = file_text
        logger.info(
            "Received upload: filename=%s, size=%d chars",
            file.filename or "unknown",
            len(file_text),
        )

    result = await snippet_service.submit(store, content)
    link = str(request.url_for("view_snippet", key=result.snippet.key))

    return UploadResponse(
        success=True,
        link=link,
        message=CREATED_MESSAGE if result.created else EXISTING_MESSAGE,
    )
