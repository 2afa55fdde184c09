"""Buy-in and buy-back bookkeeping for leased items."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date

from rateio.domain.errors import NotALeaseExpenseError
from rateio.domain.expenses import ExpenseRecord, SettlementMode
from rateio.domain.services.share_distribution import compute_participant_shares


@dataclass(frozen=True, slots=True)
class BuybackShare:
    """Amount the item owner pays back to one co-user."""

    participant_id: str
    amount: int


@dataclass(frozen=True, slots=True)
class BuyInShare:
    """Amount one co-user owes the item owner up front."""

    participant_id: str
    amount: int
    paid: bool


@dataclass(frozen=True, slots=True)
class LeaseItem:
    """Projection of one LEASE expense."""

    expense_id: str
    item_name: str
    total_cost: int
    owner_id: str
    buyback_date: date | None
    buyback_active: bool
    buyback_completed: bool
    buyback_breakdown: list[BuybackShare]
    buy_in_breakdown: list[BuyInShare]

    @property
    def buyback_pending(self) -> bool:
        """Whether buy-back amounts are currently owed by the owner."""

        return self.buyback_active and not self.buyback_completed


def project_lease_item(expense: ExpenseRecord) -> LeaseItem:
    owner_id = expense.lease_owner
    shares = compute_participant_shares(expense)

    buyback_breakdown = [
        BuybackShare(participant_id=participant_id, amount=amount)
        for participant_id, amount in shares.items()
        if participant_id != owner_id and amount != 0
    ]
    buy_in_breakdown = [
        BuyInShare(
            participant_id=participant_id,
            amount=amount,
            paid=participant_id in expense.lease_buy_in_payments,
        )
        for participant_id, amount in shares.items()
        if participant_id != expense.paid_by and amount != 0
    ]

    return LeaseItem(
        expense_id=expense.id,
        item_name=expense.lease_item_name or expense.title,
        total_cost=expense.amount,
        owner_id=owner_id,
        buyback_date=expense.lease_buyback_date,
        buyback_active=expense.lease_buyback_active,
        buyback_completed=expense.lease_buyback_completed,
        buyback_breakdown=buyback_breakdown,
        buy_in_breakdown=buy_in_breakdown,
    )


def get_lease_items(expenses: Iterable[ExpenseRecord]) -> list[LeaseItem]:
    """Project every LEASE expense into its buy-in and buy-back breakdowns."""

    return [project_lease_item(expense) for expense in expenses]


def ensure_lease_expense(expense: ExpenseRecord) -> None:
    """Reject lease commands aimed at expenses settled in another mode."""

    if expense.effective_settlement_mode != SettlementMode.LEASE:
        raise NotALeaseExpenseError(
            details={
                "expense_id": expense.id,
                "settlement_mode": expense.effective_settlement_mode.value,
            }
        )


def toggle_buyback_active(expense: ExpenseRecord) -> ExpenseRecord:
    """Offer or retract the buy-back of a leased item."""

    ensure_lease_expense(expense)
    return replace(expense, lease_buyback_active=not expense.lease_buyback_active)


def toggle_buyback_completed(expense: ExpenseRecord) -> ExpenseRecord:
    """Mark the buy-back as settled, or undo that mark."""

    ensure_lease_expense(expense)
    return replace(
        expense,
        lease_buyback_completed=not expense.lease_buyback_completed,
    )


def toggle_buy_in_payment(
    expense: ExpenseRecord,
    participant_id: str,
) -> ExpenseRecord:
    """Flip the paid flag of one co-user's buy-in share."""

    ensure_lease_expense(expense)
    payments = set(expense.lease_buy_in_payments)
    if participant_id in payments:
        payments.remove(participant_id)
    else:
        payments.add(participant_id)
    return replace(expense, lease_buy_in_payments=frozenset(payments))
