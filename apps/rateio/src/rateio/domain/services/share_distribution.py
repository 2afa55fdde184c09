"""Exact-sum distribution of expense amounts among participants."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from fractions import Fraction
from typing import assert_never

from rateio.domain.expenses import (
    ExpenseRecord,
    ParticipantShare,
    SplitMode,
    resolve_split_mode,
)
from rateio.domain.money import round_half_up


@dataclass(frozen=True, slots=True)
class DistributedShare:
    """Amount assigned to one recipient of a split."""

    participant_id: str
    amount: int


def _recipient_fraction(
    split_mode: SplitMode,
    recipient: ParticipantShare,
    recipient_count: int,
    total_shares: int,
) -> Fraction:
    match split_mode:
        case SplitMode.EVENLY:
            return Fraction(1, recipient_count)
        case SplitMode.BY_SHARES | SplitMode.BY_PERCENTAGE | SplitMode.BY_AMOUNT:
            if total_shares == 0:
                return Fraction(1, recipient_count)
            return Fraction(recipient.shares) / Fraction(total_shares)
        case _:
            assert_never(split_mode)


def distribute_amount(
    amount: int,
    split_mode: SplitMode | str | None,
    recipients: Sequence[ParticipantShare],
) -> list[DistributedShare]:
    """Split amount among recipients so the parts always add up to amount.

    Every recipient but the last receives its rounded fraction of the amount;
    the last one in input order absorbs whatever is left. Because every
    earlier share rounds half up, that remainder can be negative on tiny
    amounts: 2 split evenly across 4 recipients yields [1, 1, 1, -1]. Unknown
    split modes are treated as EVENLY.
    """

    mode = resolve_split_mode(split_mode)
    total_shares = sum(recipient.shares for recipient in recipients)
    last_index = len(recipients) - 1
    remaining = amount
    distributed: list[DistributedShare] = []
    for index, recipient in enumerate(recipients):
        if index == last_index:
            share_amount = remaining
        else:
            fraction = _recipient_fraction(
                mode, recipient, len(recipients), total_shares
            )
            share_amount = round_half_up(amount * fraction)
        remaining -= share_amount
        distributed.append(
            DistributedShare(
                participant_id=recipient.participant_id,
                amount=share_amount,
            )
        )
    return distributed


def _accumulate(target: dict[str, int], shares: Iterable[DistributedShare]) -> None:
    for share in shares:
        current = target.get(share.participant_id, 0)
        target[share.participant_id] = current + share.amount


def compute_participant_shares(expense: ExpenseRecord) -> dict[str, int]:
    """Return how much each participant owes for one expense.

    The part of the amount not covered by sub-items follows the expense split;
    each sub-item follows its own split. Keys keep first-seen order.
    """

    sub_item_total = sum(sub_item.amount for sub_item in expense.sub_items)
    remainder = expense.amount - sub_item_total

    shares: dict[str, int] = {}
    if remainder > 0:
        _accumulate(
            shares,
            distribute_amount(remainder, expense.split_mode, expense.paid_for),
        )
    for sub_item in expense.sub_items:
        _accumulate(
            shares,
            distribute_amount(sub_item.amount, sub_item.split_mode, sub_item.paid_for),
        )
    return shares
