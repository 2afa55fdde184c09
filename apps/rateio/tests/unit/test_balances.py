"""Unit tests for NORMAL balances and the debt simplifier."""

from __future__ import annotations

from rateio.domain.expenses import ExpenseRecord, ParticipantShare, SubItem
from rateio.domain.services.balances import (
    Balance,
    Reimbursement,
    get_balances,
    get_public_balances,
    get_suggested_reimbursements,
)


def _net(**totals: int) -> dict[str, Balance]:
    return {
        participant_id: Balance(paid=0, paid_for=0, total=total)
        for participant_id, total in totals.items()
    }


def _even_expense(
    expense_id: str, amount: int, paid_by: str, *paid_for: str
) -> ExpenseRecord:
    return ExpenseRecord(
        id=expense_id,
        title=expense_id,
        amount=amount,
        paid_by=paid_by,
        paid_for=tuple(ParticipantShare(pid) for pid in paid_for),
    )


def test_get_balances_tracks_paid_owed_and_net() -> None:
    expense = ExpenseRecord(
        id="e1",
        title="Mercado",
        amount=3000,
        paid_by="a",
        paid_for=(ParticipantShare("a"),),
        sub_items=(
            SubItem(
                amount=800,
                paid_for=(ParticipantShare("a"), ParticipantShare("b")),
            ),
        ),
    )

    balances = get_balances([expense])

    assert balances == {
        "a": Balance(paid=3000, paid_for=2600, total=400),
        "b": Balance(paid=0, paid_for=400, total=-400),
    }


def test_get_balances_of_no_expenses_is_empty() -> None:
    assert get_balances([]) == {}


def test_balances_are_conserved() -> None:
    expenses = [
        _even_expense("e1", 1000, "a", "a", "b", "c"),
        _even_expense("e2", 2500, "b", "b", "c"),
        _even_expense("e3", 777, "c", "a", "b", "c", "d"),
    ]

    balances = get_balances(expenses)

    assert sum(balance.total for balance in balances.values()) == 0


def test_two_person_debt_yields_single_transfer() -> None:
    assert get_suggested_reimbursements(_net(a=500, b=-500)) == [
        Reimbursement(from_id="b", to_id="a", amount=500)
    ]


def test_one_creditor_two_debtors() -> None:
    reimbursements = get_suggested_reimbursements(_net(a=1000, b=-500, c=-500))

    assert reimbursements == [
        Reimbursement(from_id="c", to_id="a", amount=500),
        Reimbursement(from_id="b", to_id="a", amount=500),
    ]


def test_settled_balances_produce_no_transfers() -> None:
    assert get_suggested_reimbursements(_net(a=0, b=0)) == []
    assert get_suggested_reimbursements({}) == []


def test_transfers_are_minimal_and_replay_to_zero() -> None:
    balances = _net(a=700, b=-300, c=-250, d=450, e=-600)

    reimbursements = get_suggested_reimbursements(balances)

    non_zero = [pid for pid, balance in balances.items() if balance.total != 0]
    assert len(reimbursements) <= len(non_zero) - 1
    remaining = {pid: balance.total for pid, balance in balances.items()}
    for reimbursement in reimbursements:
        assert reimbursement.amount > 0
        remaining[reimbursement.from_id] += reimbursement.amount
        remaining[reimbursement.to_id] -= reimbursement.amount
    assert set(remaining.values()) == {0}


def test_paying_a_suggestion_keeps_the_rest_stable() -> None:
    balances = _net(a=1000, b=-500, c=-500)
    first, second = get_suggested_reimbursements(balances)

    after_payment = _net(a=1000 - first.amount, b=-500, c=-500 + first.amount)

    assert get_suggested_reimbursements(after_payment) == [second]


def test_public_balances_derive_from_transfers() -> None:
    public = get_public_balances(
        [
            Reimbursement(from_id="c", to_id="a", amount=500),
            Reimbursement(from_id="b", to_id="a", amount=300),
        ]
    )

    assert public == {
        "c": Balance(paid=0, paid_for=500, total=-500),
        "a": Balance(paid=800, paid_for=0, total=800),
        "b": Balance(paid=0, paid_for=300, total=-300),
    }
