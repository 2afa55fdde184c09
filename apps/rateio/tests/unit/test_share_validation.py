"""Unit tests for expense split validation."""

from __future__ import annotations

import pytest

from rateio.domain.errors import InvalidSplitError
from rateio.domain.expenses import ExpenseRecord, ParticipantShare, SplitMode, SubItem
from rateio.domain.services.share_validation import (
    collect_share_issues,
    validate_expense_shares,
)


def _expense(
    amount: int,
    split_mode: SplitMode,
    *shares: tuple[str, int],
    sub_items: tuple[SubItem, ...] = (),
) -> ExpenseRecord:
    return ExpenseRecord(
        id="e1",
        title="Jantar",
        amount=amount,
        paid_by="a",
        paid_for=tuple(ParticipantShare(pid, value) for pid, value in shares),
        split_mode=split_mode,
        sub_items=sub_items,
    )


def test_consistent_expenses_have_no_issues() -> None:
    assert collect_share_issues(_expense(1000, SplitMode.EVENLY, ("a", 1))) == []
    assert (
        collect_share_issues(
            _expense(1000, SplitMode.BY_AMOUNT, ("a", 400), ("b", 600))
        )
        == []
    )
    assert (
        collect_share_issues(
            _expense(1000, SplitMode.BY_PERCENTAGE, ("a", 5000), ("b", 5000))
        )
        == []
    )


def test_by_amount_must_add_up_to_the_amount() -> None:
    issues = collect_share_issues(
        _expense(1000, SplitMode.BY_AMOUNT, ("a", 400), ("b", 500))
    )

    assert issues == [
        {
            "path": ["paid_for"],
            "reason": "amountSum",
            "expected": 1000,
            "actual": 900,
        }
    ]


def test_by_percentage_must_add_up_to_one_hundred_percent() -> None:
    issues = collect_share_issues(
        _expense(1000, SplitMode.BY_PERCENTAGE, ("a", 5000), ("b", 4000))
    )

    assert [issue["reason"] for issue in issues] == ["percentageSum"]
    assert issues[0]["expected"] == 10000


def test_shares_must_be_positive_and_present() -> None:
    assert [
        issue["reason"]
        for issue in collect_share_issues(
            _expense(1000, SplitMode.BY_SHARES, ("a", 0), ("b", 1))
        )
    ] == ["noZeroShares"]
    empty_split = collect_share_issues(_expense(1000, SplitMode.EVENLY))
    assert [issue["reason"] for issue in empty_split] == ["paidForMin1"]


def test_sub_items_are_checked_against_the_parent() -> None:
    sub_item = SubItem(
        amount=1200,
        split_mode=SplitMode.BY_AMOUNT,
        paid_for=(ParticipantShare("a", 1000),),
    )

    issues = collect_share_issues(
        _expense(1000, SplitMode.EVENLY, ("a", 1), sub_items=(sub_item,))
    )

    assert issues == [
        {
            "path": ["sub_items"],
            "reason": "subItemsTotalExceeded",
            "expected": 1000,
            "actual": 1200,
        },
        {
            "path": ["sub_items", 0, "paid_for"],
            "reason": "amountSum",
            "expected": 1200,
            "actual": 1000,
        },
    ]


def test_validate_expense_shares_raises_invalid_split() -> None:
    with pytest.raises(InvalidSplitError) as exc_info:
        validate_expense_shares(
            _expense(1000, SplitMode.BY_AMOUNT, ("a", 100), ("b", 100))
        )

    error = exc_info.value
    assert error.status_code == 422
    assert error.code == "INVALID_SPLIT"
    assert error.details["expense_id"] == "e1"
    assert error.details["errors"][0]["reason"] == "amountSum"


def test_validate_expense_shares_accepts_consistent_split() -> None:
    validate_expense_shares(_expense(1000, SplitMode.BY_SHARES, ("a", 1), ("b", 3)))
