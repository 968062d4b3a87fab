"""
SnipBin Backend: Pydantic Schemas
===================================

What:  Pydantic models for store results and HTTP responses.
Why:   Stores hand back detached, validated records instead of live ORM rows,
       so both store implementations return the same types and nothing
       outside the store can mutate a snippet.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Store Results
# ══════════════════════════════════════════════════════════════════════════


class SnippetRecord(BaseModel):
    """Read-only view of one stored snippet."""

    key: str = Field(description="Public snippet identifier")
    content: str = Field(description="Stored source text")
    created_at: datetime = Field(description="Creation time (UTC)")
    view_count: int = Field(ge=0, description="Paste-route retrievals so far")

    model_config = {"from_attributes": True, "frozen": True}

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # SQLite hands DateTime(timezone=True) columns back naive
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class InsertResult(BaseModel):
    """
    Outcome of SnippetStore.insert_if_absent().

    created is False when the key was already present, including the case
    where a concurrent request won the insert race.
    """

    created: bool
    snippet: SnippetRecord


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UploadResponse(BaseModel):
    """
    Body of POST /upload.

    Null fields are omitted on the wire, so a success carries
    {success, link, message} and a failure carries {error}.

    Example:
        {
            "success": true,
            "link": "http://localhost:3000/paste/5d41402abc4b2a76b9719d911017c592",
            "message": "Snippet uploaded successfully!"
        }
    """

    success: bool = Field(default=True)
    link: Optional[str] = Field(default=None, description="Absolute URL of the paste page")
    message: Optional[str] = Field(default=None, description="Human-readable outcome")
    error: Optional[str] = Field(default=None, description="Error description")


class ErrorResponse(BaseModel):
    """JSON error body used by the 400 and 500 handlers."""

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Liveness probe body for GET /health."""

    status: str = Field(default="OK")
    timestamp: str = Field(description="Current server time, ISO 8601 UTC")
