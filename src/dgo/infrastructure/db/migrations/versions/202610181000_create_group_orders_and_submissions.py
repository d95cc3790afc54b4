"""create group orders and submissions

Revision ID: 202610181000
Revises: 202610180900
Create Date: 2026-10-18 10:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610181000"
down_revision = "202610180900"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "group_orders",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("restaurant_id", sa.String(length=50), nullable=False),
        sa.Column("restaurant_name", sa.String(length=255), nullable=False),
        sa.Column("menu_id", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_by", sa.String(length=100), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["restaurant_id"], ["restaurants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["menu_id"], ["menus.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_group_orders_restaurant_id", "group_orders", ["restaurant_id"], unique=False
    )

    op.create_table(
        "submissions",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("group_order_id", sa.String(length=50), nullable=False),
        sa.Column("user_name", sa.String(length=100), nullable=False),
        sa.Column("total", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["group_order_id"], ["group_orders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_submissions_group_order_created_at",
        "submissions",
        ["group_order_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "submission_lines",
        sa.Column("submission_id", sa.String(length=50), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("menu_item_id", sa.String(length=50), nullable=False),
        sa.Column("menu_item_name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("temperature", sa.String(length=50), nullable=False),
        sa.Column("sugar_level", sa.String(length=50), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.CheckConstraint("quantity >= 1", name="ck_submission_lines_quantity_positive"),
        sa.ForeignKeyConstraint(["submission_id"], ["submissions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("submission_id", "position"),
    )


def downgrade() -> None:
    op.drop_table("submission_lines")
    op.drop_index("ix_submissions_group_order_created_at", table_name="submissions")
    op.drop_table("submissions")
    op.drop_index("ix_group_orders_restaurant_id", table_name="group_orders")
    op.drop_table("group_orders")
