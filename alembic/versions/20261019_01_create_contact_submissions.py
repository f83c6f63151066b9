"""Create contact_submissions table.

Revision ID: 20261019_01
Revises:
Create Date: 2026-10-19 00:00:00
"""

# pylint: disable=invalid-name,missing-module-docstring

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create contact_submissions table."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    # Tables may already exist when the app created them on startup
    if inspector.has_table("contact_submissions"):
        return

    op.create_table(
        "contact_submissions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_contact_submissions_id"), "contact_submissions", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_contact_submissions_email"),
        "contact_submissions",
        ["email"],
        unique=False,
    )
    op.create_index(
        op.f("ix_contact_submissions_created_at"),
        "contact_submissions",
        ["created_at"],
        unique=False,
    )


def downgrade():
    """Drop contact_submissions table."""
    op.drop_index(
        op.f("ix_contact_submissions_created_at"), table_name="contact_submissions"
    )
    op.drop_index(op.f("ix_contact_submissions_email"), table_name="contact_submissions")
    op.drop_index(op.f("ix_contact_submissions_id"), table_name="contact_submissions")
    op.drop_table("contact_submissions")
