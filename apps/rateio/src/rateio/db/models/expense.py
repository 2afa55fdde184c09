"""Expense ORM models, including split rows and lease buy-in payments."""

from __future__ import annotations

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rateio.db.base import Base
from rateio.domain.expenses import SettlementMode, SplitMode


def _enum_values(enum_cls: type[SplitMode] | type[SettlementMode]) -> list[str]:
    return [member.value for member in enum_cls]


class Expense(Base):
    """One shared expense paid by a participant of a group."""

    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_expenses_amount_non_negative"),
        Index("ix_expenses_group_id_expense_date", "group_id", "expense_date"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    group_id: Mapped[str] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(280), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    expense_date: Mapped[date] = mapped_column(
        Date, nullable=False, server_default=func.current_date()
    )
    paid_by_id: Mapped[str] = mapped_column(
        ForeignKey("participants.id"),
        nullable=False,
    )
    split_mode: Mapped[SplitMode] = mapped_column(
        Enum(
            SplitMode,
            name="split_mode",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=SplitMode.EVENLY,
    )
    # NULL on rows created before settlement modes existed
    settlement_mode: Mapped[SettlementMode | None] = mapped_column(
        Enum(
            SettlementMode,
            name="settlement_mode",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=True,
    )
    is_reimbursement: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    lease_owner_id: Mapped[str | None] = mapped_column(
        ForeignKey("participants.id"),
        nullable=True,
    )
    lease_item_name: Mapped[str | None] = mapped_column(String(280), nullable=True)
    lease_buyback_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    lease_buyback_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    lease_buyback_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    paid_for: Mapped[list[ExpensePaidFor]] = relationship(
        "ExpensePaidFor",
        order_by="ExpensePaidFor.position",
        cascade="all, delete-orphan",
    )
    sub_items: Mapped[list[ExpenseSubItem]] = relationship(
        "ExpenseSubItem",
        order_by="ExpenseSubItem.position",
        cascade="all, delete-orphan",
    )
    lease_buy_in_payments: Mapped[list[LeaseBuyInPayment]] = relationship(
        "LeaseBuyInPayment",
        cascade="all, delete-orphan",
    )


class ExpensePaidFor(Base):
    """Recipient of the main split of an expense."""

    __tablename__ = "expense_paid_fors"
    __table_args__ = (
        CheckConstraint("shares >= 0", name="ck_expense_paid_fors_shares_positive"),
    )

    expense_id: Mapped[str] = mapped_column(
        ForeignKey("expenses.id", ondelete="CASCADE"),
        primary_key=True,
    )
    participant_id: Mapped[str] = mapped_column(
        ForeignKey("participants.id"),
        primary_key=True,
    )
    shares: Mapped[int] = mapped_column(BigInteger, nullable=False, default=1)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ExpenseSubItem(Base):
    """Part of an expense split among its own participants."""

    __tablename__ = "expense_sub_items"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_expense_sub_items_amount_positive"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    expense_id: Mapped[str] = mapped_column(
        ForeignKey("expenses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(280), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    split_mode: Mapped[SplitMode] = mapped_column(
        Enum(
            SplitMode,
            name="split_mode",
            values_callable=_enum_values,
            validate_strings=True,
        ),
        nullable=False,
        default=SplitMode.EVENLY,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    paid_for: Mapped[list[ExpenseSubItemPaidFor]] = relationship(
        "ExpenseSubItemPaidFor",
        order_by="ExpenseSubItemPaidFor.position",
        cascade="all, delete-orphan",
    )


class ExpenseSubItemPaidFor(Base):
    """Recipient of a sub-item split."""

    __tablename__ = "expense_sub_item_paid_fors"

    sub_item_id: Mapped[str] = mapped_column(
        ForeignKey("expense_sub_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    participant_id: Mapped[str] = mapped_column(
        ForeignKey("participants.id"),
        primary_key=True,
    )
    shares: Mapped[int] = mapped_column(BigInteger, nullable=False, default=1)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class LeaseBuyInPayment(Base):
    """Marks that a co-user already paid their buy-in of a leased item."""

    __tablename__ = "lease_buy_in_payments"

    expense_id: Mapped[str] = mapped_column(
        ForeignKey("expenses.id", ondelete="CASCADE"),
        primary_key=True,
    )
    participant_id: Mapped[str] = mapped_column(
        ForeignKey("participants.id"),
        primary_key=True,
    )
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
