"""Unit tests for the per-person debt view."""

from __future__ import annotations

from datetime import date

from rateio.domain.expenses import ExpenseRecord, ParticipantShare, SettlementMode
from rateio.domain.services.person_debts import (
    CreditorDebt,
    PersonDebtItem,
    PersonDebtType,
    compute_person_debts,
    get_person_debts,
    get_viewer_totals,
)
from rateio.domain.services.settlement import (
    SettlementBalances,
    SettlementTotals,
    compute_group_settlement,
    get_settlement_balances,
)


def _expense(
    expense_id: str,
    amount: int,
    paid_by: str,
    paid_for: tuple[str, ...],
    settlement_mode: SettlementMode = SettlementMode.NORMAL,
    *,
    lease_owner_id: str | None = None,
    lease_buyback_active: bool = False,
) -> ExpenseRecord:
    return ExpenseRecord(
        id=expense_id,
        title=f"title-{expense_id}",
        amount=amount,
        paid_by=paid_by,
        paid_for=tuple(ParticipantShare(pid) for pid in paid_for),
        settlement_mode=settlement_mode,
        lease_owner_id=lease_owner_id,
        lease_item_name="Barraca" if lease_owner_id else None,
        lease_buyback_date=date(2026, 12, 1) if lease_owner_id else None,
        lease_buyback_active=lease_buyback_active,
    )


def _debts_of(person_id: str, settlement: SettlementBalances) -> list[CreditorDebt]:
    return get_person_debts(
        person_id,
        settlement.normal.reimbursements,
        settlement.straight,
        settlement.lease,
    )


def test_debts_are_grouped_by_creditor_largest_first() -> None:
    settlement = get_settlement_balances(
        [
            _expense("e1", 1000, "a", ("a", "d")),
            _expense("e2", 600, "c", ("c", "d"), SettlementMode.STRAIGHT),
            _expense(
                "e3",
                2000,
                "a",
                ("a", "d"),
                SettlementMode.LEASE,
                lease_owner_id="a",
            ),
        ]
    )

    debts = _debts_of("d", settlement)

    assert [(debt.creditor_id, debt.total_amount) for debt in debts] == [
        ("a", 1500),
        ("c", 300),
    ]
    assert debts[0].items == [
        PersonDebtItem(type=PersonDebtType.NORMAL, amount=500),
        PersonDebtItem(
            type=PersonDebtType.LEASE_BUY_IN,
            amount=1000,
            lease_item_name="Barraca",
            lease_expense_id="e3",
            buy_in_participant_id="d",
        ),
    ]
    assert debts[1].items == [
        PersonDebtItem(
            type=PersonDebtType.STRAIGHT,
            amount=300,
            expense_id="e2",
            expense_title="title-e2",
        )
    ]


def test_equal_totals_are_ordered_by_creditor_id() -> None:
    settlement = get_settlement_balances(
        [
            _expense("e1", 1000, "b", ("b", "d"), SettlementMode.STRAIGHT),
            _expense("e2", 1000, "a", ("a", "d"), SettlementMode.STRAIGHT),
        ]
    )

    debts = _debts_of("d", settlement)

    assert [debt.creditor_id for debt in debts] == ["a", "b"]


def test_owner_owes_pending_buybacks() -> None:
    settlement = get_settlement_balances(
        [
            _expense(
                "e1",
                3000,
                "a",
                ("a", "b", "c"),
                SettlementMode.LEASE,
                lease_owner_id="a",
                lease_buyback_active=True,
            )
        ]
    )

    debts = _debts_of("a", settlement)

    assert [(debt.creditor_id, debt.total_amount) for debt in debts] == [
        ("b", 1000),
        ("c", 1000),
    ]
    assert {item.type for debt in debts for item in debt.items} == {
        PersonDebtType.LEASE_BUYBACK
    }


def test_person_without_obligations_has_no_debts() -> None:
    settlement = get_settlement_balances([_expense("e1", 1000, "a", ("a", "b"))])

    assert _debts_of("a", settlement) == []
    assert _debts_of("nobody", settlement) == []


def test_viewer_totals_split_owed_and_owed_to_you() -> None:
    settlement = get_settlement_balances(
        [
            _expense("e1", 1000, "a", ("a", "b")),
            _expense(
                "e2",
                3000,
                "a",
                ("a", "b", "c"),
                SettlementMode.LEASE,
                lease_owner_id="a",
            ),
            _expense("e3", 400, "c", ("a", "c"), SettlementMode.STRAIGHT),
        ]
    )

    assert get_viewer_totals("a", settlement) == SettlementTotals(
        total_owed=200,
        total_owed_to_you=500 + 2000,
        net=200 - 2500,
    )
    assert get_viewer_totals("b", settlement) == SettlementTotals(
        total_owed=1500,
        total_owed_to_you=0,
        net=1500,
    )


def test_public_operation_names_match_engine_functions() -> None:
    expenses = [_expense("e1", 900, "a", ("a", "b", "c"))]

    settlement = compute_group_settlement(expenses)
    debts = compute_person_debts(
        "c",
        settlement.normal.reimbursements,
        settlement.straight,
        settlement.lease,
    )

    assert settlement == get_settlement_balances(expenses)
    assert debts == _debts_of("c", settlement)
