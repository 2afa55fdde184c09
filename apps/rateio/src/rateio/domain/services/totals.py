"""Group spending statistics."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from fractions import Fraction
from typing import assert_never

from rateio.domain.expenses import (
    PERCENTAGE_TOTAL_BASIS_POINTS,
    ExpenseRecord,
    ParticipantShare,
    SplitMode,
    resolve_split_mode,
)
from rateio.domain.money import round_half_up


def get_total_group_spending(expenses: Iterable[ExpenseRecord]) -> int:
    """Sum of every expense that is not itself a reimbursement."""

    return sum(expense.amount for expense in expenses if not expense.is_reimbursement)


def get_total_participant_paid_for(
    participant_id: str,
    expenses: Iterable[ExpenseRecord],
) -> int:
    """Sum of non-reimbursement expenses paid by participant_id."""

    return sum(
        expense.amount
        for expense in expenses
        if expense.paid_by == participant_id and not expense.is_reimbursement
    )


def _share_for_split(
    participant_id: str,
    amount: int,
    split_mode: SplitMode | str | None,
    paid_for: Sequence[ParticipantShare],
) -> Fraction:
    entry = next(
        (item for item in paid_for if item.participant_id == participant_id),
        None,
    )
    if entry is None:
        return Fraction(0)

    mode = resolve_split_mode(split_mode)
    match mode:
        case SplitMode.EVENLY:
            return Fraction(amount, len(paid_for))
        case SplitMode.BY_AMOUNT:
            return Fraction(entry.shares)
        case SplitMode.BY_PERCENTAGE:
            return Fraction(amount * entry.shares, PERCENTAGE_TOTAL_BASIS_POINTS)
        case SplitMode.BY_SHARES:
            total_shares = sum(item.shares for item in paid_for)
            if total_shares == 0:
                return Fraction(0)
            return Fraction(amount * entry.shares, total_shares)
        case _:
            assert_never(mode)


def calculate_share(participant_id: str, expense: ExpenseRecord) -> Fraction:
    """Exact share of one expense attributed to participant_id."""

    if expense.is_reimbursement:
        return Fraction(0)

    sub_item_total = sum(sub_item.amount for sub_item in expense.sub_items)
    remainder = expense.amount - sub_item_total

    share = Fraction(0)
    if remainder > 0:
        share += _share_for_split(
            participant_id, remainder, expense.split_mode, expense.paid_for
        )
    for sub_item in expense.sub_items:
        share += _share_for_split(
            participant_id, sub_item.amount, sub_item.split_mode, sub_item.paid_for
        )
    return share


def get_total_participant_share(
    participant_id: str,
    expenses: Iterable[ExpenseRecord],
) -> int:
    """Sum of participant_id's shares, rounded to a whole minor unit."""

    total = sum(
        (calculate_share(participant_id, expense) for expense in expenses),
        Fraction(0),
    )
    return round_half_up(total)
