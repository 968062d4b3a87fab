"""
SnipBin Backend: Snippet SQLAlchemy Model
===========================================

What:  ORM model representing the `snippets` table.
Who:   Used by SqlSnippetStore for reads/writes and by Alembic for schema management.

Table Design:
    - id: surrogate integer primary key, never exposed over HTTP
    - key: public identifier and URL segment; UNIQUE so the database, not the
      application, arbitrates concurrent inserts of the same key
    - content: TEXT, no artificial length limit
    - created_at: UTC with timezone, set once
    - view_count: incremented by GET /paste/{key}, never by GET /raw/{key}
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from snipbin.database import Base


class Snippet(Base):
    """
    One stored text blob.

    Lifecycle:
        1. Created by the first successful insert of its key
        2. view_count grows with each paste-route retrieval
        3. Never updated otherwise, never deleted
    """

    __tablename__ = "snippets"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # 32 hex chars for generated keys; 64 leaves room for a wider digest.
    key: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Public snippet identifier, used as the URL path segment",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Submitted source text, immutable after creation",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this snippet was created (UTC)",
    )

    view_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Number of paste-route retrievals",
    )

    __table_args__ = (
        UniqueConstraint("key", name="uq_snippets_key"),
    )

    def __repr__(self) -> str:
        return f"<Snippet(key='{self.key}', views={self.view_count})>"
