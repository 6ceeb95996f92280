# migrations/versions/20261019_0001_seo_and_page.py
"""Create the seo and page tables."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# Revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "seo",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("keywords", sa.Text(), nullable=False),
        sa.Column("og_title", sa.String(length=255), nullable=False),
        sa.Column("og_description", sa.Text(), nullable=False),
        sa.Column("og_image", sa.Text(), nullable=False),
        sa.Column("obj_name", sa.String(length=128), nullable=False),
        sa.Column("obj_pk", sa.String(length=128), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_seo"),
        sa.UniqueConstraint("obj_name", "obj_pk", name="uq_seo_obj_name_obj_pk"),
    )

    op.create_table(
        "page",
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("href", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("slug", name="pk_page"),
    )


def downgrade() -> None:
    op.drop_table("page")
    op.drop_table("seo")
