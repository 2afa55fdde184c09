"""Expense persistence operations."""

from __future__ import annotations

from sqlalchemy import Select, or_, select
from sqlalchemy.orm import Session, selectinload

from rateio.db.models.expense import (
    Expense,
    ExpenseSubItem,
    LeaseBuyInPayment,
)
from rateio.domain.expenses import (
    ExpenseRecord,
    ParticipantShare,
    SettlementMode,
    SubItem,
)


def expense_to_record(expense: Expense) -> ExpenseRecord:
    """Convert a stored expense into the snapshot consumed by the engine."""

    return ExpenseRecord(
        id=expense.id,
        title=expense.title,
        amount=expense.amount,
        paid_by=expense.paid_by_id,
        paid_for=tuple(
            ParticipantShare(participant_id=row.participant_id, shares=row.shares)
            for row in expense.paid_for
        ),
        split_mode=expense.split_mode,
        settlement_mode=expense.settlement_mode,
        sub_items=tuple(
            SubItem(
                amount=sub_item.amount,
                split_mode=sub_item.split_mode,
                title=sub_item.title,
                paid_for=tuple(
                    ParticipantShare(
                        participant_id=row.participant_id,
                        shares=row.shares,
                    )
                    for row in sub_item.paid_for
                ),
            )
            for sub_item in expense.sub_items
        ),
        expense_date=expense.expense_date,
        is_reimbursement=expense.is_reimbursement,
        lease_owner_id=expense.lease_owner_id,
        lease_item_name=expense.lease_item_name,
        lease_buyback_date=expense.lease_buyback_date,
        lease_buyback_active=expense.lease_buyback_active,
        lease_buyback_completed=expense.lease_buyback_completed,
        lease_buy_in_payments=frozenset(
            payment.participant_id for payment in expense.lease_buy_in_payments
        ),
    )


def _with_children(statement: Select[tuple[Expense]]) -> Select[tuple[Expense]]:
    return statement.options(
        selectinload(Expense.paid_for),
        selectinload(Expense.sub_items).selectinload(ExpenseSubItem.paid_for),
        selectinload(Expense.lease_buy_in_payments),
    )


class ExpenseRepository:
    """Repository for group expenses and their lease state."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_expenses(
        self,
        group_id: str,
        settlement_mode: SettlementMode | None = None,
    ) -> list[ExpenseRecord]:
        statement = _with_children(
            select(Expense)
            .where(Expense.group_id == group_id)
            .order_by(
                Expense.expense_date.asc(),
                Expense.created_at.asc(),
                Expense.id.asc(),
            )
        )
        if settlement_mode == SettlementMode.NORMAL:
            statement = statement.where(
                or_(
                    Expense.settlement_mode == SettlementMode.NORMAL,
                    Expense.settlement_mode.is_(None),
                )
            )
        elif settlement_mode is not None:
            statement = statement.where(Expense.settlement_mode == settlement_mode)

        expenses = self._session.scalars(statement).all()
        return [expense_to_record(expense) for expense in expenses]

    def get_expense_for_update(
        self,
        group_id: str,
        expense_id: str,
    ) -> Expense | None:
        statement = _with_children(
            select(Expense)
            .where(Expense.id == expense_id, Expense.group_id == group_id)
            .with_for_update()
        )
        return self._session.scalar(statement)

    def add(self, expense: Expense) -> Expense:
        self._session.add(expense)
        self._session.flush()
        return expense

    def apply_lease_state(self, expense: Expense, record: ExpenseRecord) -> Expense:
        """Persist the mutable lease flags and buy-in payments of record."""

        expense.lease_buyback_active = record.lease_buyback_active
        expense.lease_buyback_completed = record.lease_buyback_completed

        stored_ids = {
            payment.participant_id for payment in expense.lease_buy_in_payments
        }
        for payment in list(expense.lease_buy_in_payments):
            if payment.participant_id not in record.lease_buy_in_payments:
                expense.lease_buy_in_payments.remove(payment)
        for participant_id in sorted(record.lease_buy_in_payments - stored_ids):
            expense.lease_buy_in_payments.append(
                LeaseBuyInPayment(participant_id=participant_id)
            )

        self._session.flush()
        return expense
