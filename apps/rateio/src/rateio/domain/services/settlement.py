"""Routing of expenses to NORMAL, STRAIGHT and LEASE settlement."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import assert_never

from rateio.domain.expenses import ExpenseRecord, SettlementMode
from rateio.domain.services.balances import (
    Balances,
    Reimbursement,
    get_balances,
    get_public_balances,
    get_suggested_reimbursements,
)
from rateio.domain.services.lease_items import LeaseItem, get_lease_items
from rateio.domain.services.share_distribution import compute_participant_shares

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StraightBalanceItem:
    """Direct debt from one participant to the payer of one expense."""

    expense_id: str
    expense_title: str
    from_id: str
    to_id: str
    amount: int


@dataclass(frozen=True, slots=True)
class NormalSettlement:
    """Netted view of every NORMAL expense."""

    balances: Balances
    reimbursements: list[Reimbursement]
    public_balances: Balances


@dataclass(frozen=True, slots=True)
class SettlementTotals:
    """Grand totals across all settlement modes."""

    total_owed: int
    total_owed_to_you: int
    net: int


@dataclass(frozen=True, slots=True)
class SettlementBalances:
    """Merged output of the three settlement pipelines."""

    normal: NormalSettlement
    straight: list[StraightBalanceItem]
    lease: list[LeaseItem]
    totals: SettlementTotals


@dataclass(slots=True)
class ExpensePartition:
    """Expenses grouped by settlement mode, preserving input order."""

    normal: list[ExpenseRecord] = field(default_factory=list)
    straight: list[ExpenseRecord] = field(default_factory=list)
    lease: list[ExpenseRecord] = field(default_factory=list)


def partition_expenses(expenses: Iterable[ExpenseRecord]) -> ExpensePartition:
    partition = ExpensePartition()
    for expense in expenses:
        mode = expense.effective_settlement_mode
        match mode:
            case SettlementMode.NORMAL:
                partition.normal.append(expense)
            case SettlementMode.STRAIGHT:
                partition.straight.append(expense)
            case SettlementMode.LEASE:
                partition.lease.append(expense)
            case _:
                assert_never(mode)
    return partition


def get_straight_balance_items(
    expenses: Iterable[ExpenseRecord],
) -> list[StraightBalanceItem]:
    """List one debt row per non-payer participant of each STRAIGHT expense.

    Only zero shares are skipped. A negative last-recipient share from
    rounding stays as a row with a negative amount, so the rows of one
    expense still add up to what its non-payers consumed.
    """

    items: list[StraightBalanceItem] = []
    for expense in expenses:
        for participant_id, amount in compute_participant_shares(expense).items():
            if participant_id == expense.paid_by or amount == 0:
                continue
            items.append(
                StraightBalanceItem(
                    expense_id=expense.id,
                    expense_title=expense.title,
                    from_id=participant_id,
                    to_id=expense.paid_by,
                    amount=amount,
                )
            )
    return items


def compute_total_owed(
    reimbursements: Iterable[Reimbursement],
    straight: Iterable[StraightBalanceItem],
    lease: Iterable[LeaseItem],
) -> int:
    total_owed = sum(item.amount for item in reimbursements)
    total_owed += sum(item.amount for item in straight)
    for lease_item in lease:
        total_owed += sum(
            share.amount for share in lease_item.buy_in_breakdown if not share.paid
        )
        if lease_item.buyback_pending:
            total_owed += sum(share.amount for share in lease_item.buyback_breakdown)
    return total_owed


def get_settlement_balances(expenses: Iterable[ExpenseRecord]) -> SettlementBalances:
    """Compute every settlement output for a snapshot of group expenses.

    The per-viewer ``total_owed_to_you`` is not known at this layer and is
    always zero here.
    """

    partition = partition_expenses(expenses)

    balances = get_balances(partition.normal)
    reimbursements = get_suggested_reimbursements(balances)
    public_balances = get_public_balances(reimbursements)

    straight_items = get_straight_balance_items(partition.straight)
    lease_items = get_lease_items(partition.lease)

    total_owed = compute_total_owed(reimbursements, straight_items, lease_items)
    total_owed_to_you = 0

    logger.debug(
        "settlement_computed",
        extra={
            "normal_expenses": len(partition.normal),
            "straight_expenses": len(partition.straight),
            "lease_expenses": len(partition.lease),
            "reimbursements": len(reimbursements),
        },
    )
    return SettlementBalances(
        normal=NormalSettlement(
            balances=balances,
            reimbursements=reimbursements,
            public_balances=public_balances,
        ),
        straight=straight_items,
        lease=lease_items,
        totals=SettlementTotals(
            total_owed=total_owed,
            total_owed_to_you=total_owed_to_you,
            net=total_owed - total_owed_to_you,
        ),
    )


compute_group_settlement = get_settlement_balances
