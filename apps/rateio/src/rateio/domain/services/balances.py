"""Net balances and debt simplification for NORMAL settlement."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from rateio.domain.expenses import ExpenseRecord
from rateio.domain.services.share_distribution import compute_participant_shares


@dataclass(frozen=True, slots=True)
class Balance:
    """Paid and owed totals for one participant."""

    paid: int
    paid_for: int
    total: int


@dataclass(frozen=True, slots=True)
class Reimbursement:
    """Suggested transfer from a debtor to a creditor."""

    from_id: str
    to_id: str
    amount: int


Balances = dict[str, Balance]


def get_balances(expenses: Iterable[ExpenseRecord]) -> Balances:
    """Fold expenses into per-participant paid/owed balances."""

    paid: dict[str, int] = {}
    paid_for: dict[str, int] = {}

    for expense in expenses:
        paid[expense.paid_by] = paid.get(expense.paid_by, 0) + expense.amount
        paid_for.setdefault(expense.paid_by, 0)
        for participant_id, amount in compute_participant_shares(expense).items():
            paid.setdefault(participant_id, 0)
            paid_for[participant_id] = paid_for.get(participant_id, 0) + amount

    return {
        participant_id: Balance(
            paid=paid[participant_id],
            paid_for=paid_for[participant_id],
            total=paid[participant_id] - paid_for[participant_id],
        )
        for participant_id in paid
    }


def get_public_balances(reimbursements: Iterable[Reimbursement]) -> Balances:
    """Derive balances from suggested transfers only.

    Consumers of this view see net debt positions, never the raw paid and
    owed totals behind them.
    """

    paid: dict[str, int] = {}
    paid_for: dict[str, int] = {}
    for reimbursement in reimbursements:
        for participant_id in (reimbursement.from_id, reimbursement.to_id):
            paid.setdefault(participant_id, 0)
            paid_for.setdefault(participant_id, 0)
        paid_for[reimbursement.from_id] += reimbursement.amount
        paid[reimbursement.to_id] += reimbursement.amount

    return {
        participant_id: Balance(
            paid=paid[participant_id],
            paid_for=paid_for[participant_id],
            total=paid[participant_id] - paid_for[participant_id],
        )
        for participant_id in paid
    }


@dataclass(slots=True)
class _OpenBalance:
    participant_id: str
    total: int


def _reimbursement_sort_key(balance: _OpenBalance) -> tuple[int, str]:
    # creditors first, then debtors; ties broken by participant id only
    return (0 if balance.total > 0 else 1, balance.participant_id)


def get_suggested_reimbursements(
    balances: Mapping[str, Balance],
) -> list[Reimbursement]:
    """Reduce balances to a short, stable list of pairwise transfers.

    The head of the sorted list is always a creditor and the tail a debtor.
    Each step settles one of them completely, so n non-zero balances produce
    at most n - 1 transfers. Ordering depends only on sign and participant id,
    so paying one suggestion does not reshuffle the remaining ones.
    """

    open_balances = [
        _OpenBalance(participant_id=participant_id, total=balance.total)
        for participant_id, balance in balances.items()
        if balance.total != 0
    ]
    open_balances.sort(key=_reimbursement_sort_key)

    reimbursements: list[Reimbursement] = []
    while len(open_balances) > 1:
        first = open_balances[0]
        last = open_balances[-1]
        combined = first.total + last.total
        if first.total > -last.total:
            reimbursements.append(
                Reimbursement(
                    from_id=last.participant_id,
                    to_id=first.participant_id,
                    amount=-last.total,
                )
            )
            first.total = combined
            open_balances.pop()
        else:
            reimbursements.append(
                Reimbursement(
                    from_id=last.participant_id,
                    to_id=first.participant_id,
                    amount=first.total,
                )
            )
            last.total = combined
            open_balances.pop(0)

    return [item for item in reimbursements if item.amount != 0]
