"""Initial schema - edi_document, edi_document_attachment, export_run.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "edi_document",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("raw_title", sa.Text(), nullable=False),
        sa.Column("document_name", sa.Text(), nullable=False),
        sa.Column("source_uri", sa.Text(), nullable=False),
        # NULL while pending
        sa.Column("mirror_filename", sa.Text(), nullable=True),
        sa.Column("contained_message_types", postgresql.ARRAY(sa.String(16)), nullable=True),
        sa.Column("is_mig", sa.Boolean(), nullable=False),
        sa.Column("is_ahb", sa.Boolean(), nullable=False),
        sa.Column("bdew_process", sa.String(100), nullable=True),
        sa.Column("message_type_version", sa.String(16), nullable=True),
        sa.Column("document_date", sa.Date(), nullable=True),
        sa.Column("valid_from", sa.Date(), nullable=True),
        sa.Column("valid_to", sa.Date(), nullable=True),
        sa.Column("is_latest_version", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "check_identifiers",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_edi_document_source_uri", "edi_document", ["source_uri"])
    op.create_index(
        "ix_edi_document_pending",
        "edi_document",
        ["created_at"],
        postgresql_where=sa.text("mirror_filename IS NULL"),
    )

    op.create_table(
        "edi_document_attachment",
        sa.Column(
            "document_id",
            sa.UUID(),
            sa.ForeignKey("edi_document.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("filename", sa.Text(), nullable=False),
        sa.Column("content", sa.LargeBinary(), nullable=False),
    )

    op.create_table(
        "export_run",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("run_finished_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("catalog_entries", sa.Integer(), nullable=False),
        sa.Column("new_documents", sa.Integer(), nullable=False),
        sa.Column("updated_documents", sa.Integer(), nullable=False),
    )
    op.create_index("ix_export_run_finished_at", "export_run", ["run_finished_at"])


def downgrade() -> None:
    op.drop_index("ix_export_run_finished_at", table_name="export_run")
    op.drop_table("export_run")
    op.drop_table("edi_document_attachment")
    op.drop_index("ix_edi_document_pending", table_name="edi_document")
    op.drop_index("ix_edi_document_source_uri", table_name="edi_document")
    op.drop_table("edi_document")
