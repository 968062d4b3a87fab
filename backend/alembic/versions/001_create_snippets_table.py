"""Create snippets table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `snippets` table.
How:   Portable column types (works on PostgreSQL and SQLite). The UNIQUE
       constraint on `key` is what makes concurrent inserts of the same key
       safe; see SqlSnippetStore.insert_if_absent().

Rollback: downgrade() drops the table (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "snippets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "key",
            sa.String(64),
            nullable=False,
            comment="Public snippet identifier, used as the URL path segment",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Submitted source text, immutable after creation",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this snippet was created (UTC)",
        ),
        sa.Column(
            "view_count",
            sa.Integer(),
            server_default=sa.text("0"),
            nullable=False,
            comment="Number of paste-route retrievals",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key", name="uq_snippets_key"),
    )


def downgrade() -> None:
    op.drop_table("snippets")
