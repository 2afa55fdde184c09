"""Create groups, participants, expenses and lease tables.

Revision ID: 001_create_settlement_core
Revises:
Create Date: 2026-10-18
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_create_settlement_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


split_mode_enum = postgresql.ENUM(
    "EVENLY",
    "BY_SHARES",
    "BY_PERCENTAGE",
    "BY_AMOUNT",
    name="split_mode",
    create_type=False,
)
settlement_mode_enum = postgresql.ENUM(
    "NORMAL",
    "STRAIGHT",
    "LEASE",
    name="settlement_mode",
    create_type=False,
)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    bind = op.get_bind()
    split_mode_enum.create(bind, checkfirst=True)
    settlement_mode_enum.create(bind, checkfirst=True)

    op.create_table(
        "groups",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column(
            "currency", sa.String(length=3), nullable=False, server_default="BRL"
        ),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "participants",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("group_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["group_id"], ["groups.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_participants_group_id", "participants", ["group_id"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("group_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=280), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column(
            "expense_date",
            sa.Date(),
            nullable=False,
            server_default=sa.func.current_date(),
        ),
        sa.Column("paid_by_id", sa.String(length=36), nullable=False),
        sa.Column("split_mode", split_mode_enum, nullable=False),
        sa.Column("settlement_mode", settlement_mode_enum, nullable=True),
        sa.Column(
            "is_reimbursement",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("lease_owner_id", sa.String(length=36), nullable=True),
        sa.Column("lease_item_name", sa.String(length=280), nullable=True),
        sa.Column("lease_buyback_date", sa.Date(), nullable=True),
        sa.Column(
            "lease_buyback_active",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "lease_buyback_completed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        _created_at(),
        sa.CheckConstraint("amount >= 0", name="ck_expenses_amount_non_negative"),
        sa.ForeignKeyConstraint(["group_id"], ["groups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["paid_by_id"], ["participants.id"]),
        sa.ForeignKeyConstraint(["lease_owner_id"], ["participants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_expenses_group_id_expense_date",
        "expenses",
        ["group_id", "expense_date"],
    )

    op.create_table(
        "expense_paid_fors",
        sa.Column("expense_id", sa.String(length=36), nullable=False),
        sa.Column("participant_id", sa.String(length=36), nullable=False),
        sa.Column("shares", sa.BigInteger(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.CheckConstraint("shares >= 0", name="ck_expense_paid_fors_shares_positive"),
        sa.ForeignKeyConstraint(["expense_id"], ["expenses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["participant_id"], ["participants.id"]),
        sa.PrimaryKeyConstraint("expense_id", "participant_id"),
    )

    op.create_table(
        "expense_sub_items",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("expense_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=280), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("split_mode", split_mode_enum, nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.CheckConstraint("amount >= 0", name="ck_expense_sub_items_amount_positive"),
        sa.ForeignKeyConstraint(["expense_id"], ["expenses.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_expense_sub_items_expense_id", "expense_sub_items", ["expense_id"]
    )

    op.create_table(
        "expense_sub_item_paid_fors",
        sa.Column("sub_item_id", sa.String(length=36), nullable=False),
        sa.Column("participant_id", sa.String(length=36), nullable=False),
        sa.Column("shares", sa.BigInteger(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["sub_item_id"], ["expense_sub_items.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["participant_id"], ["participants.id"]),
        sa.PrimaryKeyConstraint("sub_item_id", "participant_id"),
    )

    op.create_table(
        "lease_buy_in_payments",
        sa.Column("expense_id", sa.String(length=36), nullable=False),
        sa.Column("participant_id", sa.String(length=36), nullable=False),
        sa.Column(
            "paid_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["expense_id"], ["expenses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["participant_id"], ["participants.id"]),
        sa.PrimaryKeyConstraint("expense_id", "participant_id"),
    )


def downgrade() -> None:
    op.drop_table("lease_buy_in_payments")
    op.drop_table("expense_sub_item_paid_fors")
    op.drop_index("ix_expense_sub_items_expense_id", table_name="expense_sub_items")
    op.drop_table("expense_sub_items")
    op.drop_table("expense_paid_fors")
    op.drop_index("ix_expenses_group_id_expense_date", table_name="expenses")
    op.drop_table("expenses")
    op.drop_index("ix_participants_group_id", table_name="participants")
    op.drop_table("participants")
    op.drop_table("groups")

    bind = op.get_bind()
    settlement_mode_enum.drop(bind, checkfirst=True)
    split_mode_enum.drop(bind, checkfirst=True)
