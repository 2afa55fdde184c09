"""Consistency checks for expense splits before they reach the engine."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rateio.domain.errors import InvalidSplitError, compose_error_message
from rateio.domain.expenses import (
    PERCENTAGE_TOTAL_BASIS_POINTS,
    ExpenseRecord,
    ParticipantShare,
    SplitMode,
    resolve_split_mode,
)


def _split_issues(
    *,
    path: list[str | int],
    amount: int,
    split_mode: SplitMode | str | None,
    paid_for: Sequence[ParticipantShare],
) -> list[dict[str, Any]]:
    if not paid_for:
        return [{"path": [*path, "paid_for"], "reason": "paidForMin1"}]

    issues: list[dict[str, Any]] = []
    if any(entry.shares <= 0 for entry in paid_for):
        issues.append({"path": [*path, "paid_for"], "reason": "noZeroShares"})

    share_sum = sum(entry.shares for entry in paid_for)
    mode = resolve_split_mode(split_mode)
    if mode == SplitMode.BY_AMOUNT and share_sum != amount:
        issues.append(
            {
                "path": [*path, "paid_for"],
                "reason": "amountSum",
                "expected": amount,
                "actual": share_sum,
            }
        )
    elif (
        mode == SplitMode.BY_PERCENTAGE
        and share_sum != PERCENTAGE_TOTAL_BASIS_POINTS
    ):
        issues.append(
            {
                "path": [*path, "paid_for"],
                "reason": "percentageSum",
                "expected": PERCENTAGE_TOTAL_BASIS_POINTS,
                "actual": share_sum,
            }
        )
    return issues


def collect_share_issues(expense: ExpenseRecord) -> list[dict[str, Any]]:
    """Return every split inconsistency found in the expense."""

    issues = _split_issues(
        path=[],
        amount=expense.amount,
        split_mode=expense.split_mode,
        paid_for=expense.paid_for,
    )

    sub_item_total = sum(sub_item.amount for sub_item in expense.sub_items)
    if sub_item_total > expense.amount:
        issues.append(
            {
                "path": ["sub_items"],
                "reason": "subItemsTotalExceeded",
                "expected": expense.amount,
                "actual": sub_item_total,
            }
        )

    for index, sub_item in enumerate(expense.sub_items):
        issues.extend(
            _split_issues(
                path=["sub_items", index],
                amount=sub_item.amount,
                split_mode=sub_item.split_mode,
                paid_for=sub_item.paid_for,
            )
        )
    return issues


def validate_expense_shares(expense: ExpenseRecord) -> None:
    """Raise InvalidSplitError when the expense split does not add up."""

    issues = collect_share_issues(expense)
    if issues:
        raise InvalidSplitError(
            message=compose_error_message(
                cause="Expense shares do not add up for the chosen split mode.",
                action="Fix the listed shares so they match the amount and retry.",
            ),
            details={"expense_id": expense.id, "errors": issues},
        )
