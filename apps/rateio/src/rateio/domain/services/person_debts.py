"""What one participant owes to each creditor, across settlement modes."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from rateio.domain.services.balances import Reimbursement
from rateio.domain.services.lease_items import LeaseItem
from rateio.domain.services.settlement import (
    SettlementBalances,
    SettlementTotals,
    StraightBalanceItem,
)


class PersonDebtType(enum.StrEnum):
    """Origin of one obligation."""

    NORMAL = "normal"
    STRAIGHT = "straight"
    LEASE_BUY_IN = "lease-buyin"
    LEASE_BUYBACK = "lease-buyback"


@dataclass(frozen=True, slots=True)
class PersonDebtItem:
    """Single obligation of the viewer towards one creditor."""

    type: PersonDebtType
    amount: int
    expense_id: str | None = None
    expense_title: str | None = None
    lease_item_name: str | None = None
    lease_expense_id: str | None = None
    buy_in_participant_id: str | None = None


@dataclass(frozen=True, slots=True)
class CreditorDebt:
    """All obligations owed to one creditor."""

    creditor_id: str
    total_amount: int
    items: list[PersonDebtItem]


def get_person_debts(
    person_id: str,
    reimbursements: Iterable[Reimbursement],
    straight: Iterable[StraightBalanceItem],
    lease: Iterable[LeaseItem],
) -> list[CreditorDebt]:
    """Group everything person_id owes by creditor, largest total first.

    Creditors with equal totals are ordered by creditor id.
    """

    creditor_items: dict[str, list[PersonDebtItem]] = {}

    def add_item(creditor_id: str, item: PersonDebtItem) -> None:
        creditor_items.setdefault(creditor_id, []).append(item)

    for reimbursement in reimbursements:
        if reimbursement.from_id == person_id:
            add_item(
                reimbursement.to_id,
                PersonDebtItem(type=PersonDebtType.NORMAL, amount=reimbursement.amount),
            )

    for straight_item in straight:
        if straight_item.from_id == person_id:
            add_item(
                straight_item.to_id,
                PersonDebtItem(
                    type=PersonDebtType.STRAIGHT,
                    amount=straight_item.amount,
                    expense_id=straight_item.expense_id,
                    expense_title=straight_item.expense_title,
                ),
            )

    for lease_item in lease:
        for buy_in in lease_item.buy_in_breakdown:
            if buy_in.participant_id == person_id and not buy_in.paid:
                add_item(
                    lease_item.owner_id,
                    PersonDebtItem(
                        type=PersonDebtType.LEASE_BUY_IN,
                        amount=buy_in.amount,
                        lease_item_name=lease_item.item_name,
                        lease_expense_id=lease_item.expense_id,
                        buy_in_participant_id=buy_in.participant_id,
                    ),
                )

        # the owner owes every co-user their buy-back while it is pending
        if lease_item.owner_id == person_id and lease_item.buyback_pending:
            for buyback in lease_item.buyback_breakdown:
                add_item(
                    buyback.participant_id,
                    PersonDebtItem(
                        type=PersonDebtType.LEASE_BUYBACK,
                        amount=buyback.amount,
                        lease_item_name=lease_item.item_name,
                        lease_expense_id=lease_item.expense_id,
                    ),
                )

    creditor_debts = [
        CreditorDebt(
            creditor_id=creditor_id,
            total_amount=sum(item.amount for item in items),
            items=items,
        )
        for creditor_id, items in creditor_items.items()
    ]
    creditor_debts.sort(key=lambda debt: (-debt.total_amount, debt.creditor_id))
    return creditor_debts


def get_amount_owed_to(
    person_id: str,
    reimbursements: Iterable[Reimbursement],
    straight: Iterable[StraightBalanceItem],
    lease: Iterable[LeaseItem],
) -> int:
    """Sum every open obligation whose creditor is person_id."""

    total = sum(item.amount for item in reimbursements if item.to_id == person_id)
    total += sum(item.amount for item in straight if item.to_id == person_id)
    for lease_item in lease:
        if lease_item.owner_id == person_id:
            total += sum(
                buy_in.amount
                for buy_in in lease_item.buy_in_breakdown
                if not buy_in.paid
            )
        if lease_item.buyback_pending:
            total += sum(
                buyback.amount
                for buyback in lease_item.buyback_breakdown
                if buyback.participant_id == person_id
            )
    return total


def get_viewer_totals(
    person_id: str,
    settlement: SettlementBalances,
) -> SettlementTotals:
    """Totals of one participant: what they owe, what they are owed, and net."""

    debts = get_person_debts(
        person_id,
        settlement.normal.reimbursements,
        settlement.straight,
        settlement.lease,
    )
    total_owed = sum(debt.total_amount for debt in debts)
    total_owed_to_you = get_amount_owed_to(
        person_id,
        settlement.normal.reimbursements,
        settlement.straight,
        settlement.lease,
    )
    return SettlementTotals(
        total_owed=total_owed,
        total_owed_to_you=total_owed_to_you,
        net=total_owed - total_owed_to_you,
    )


compute_person_debts = get_person_debts
