"""Unit tests for the group settlement service."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from rateio.db.models.group import Group
from rateio.db.models.participant import Participant
from rateio.domain.errors import GroupNotFoundError, ParticipantNotFoundError
from rateio.domain.expenses import ExpenseRecord, ParticipantShare, SettlementMode
from rateio.domain.services.settlement import SettlementTotals
from rateio.services.settlement_service import SettlementService


class FakeGroupRepository:
    def get_group(self, group_id: str) -> Group | None:
        if group_id != "viagem":
            return None
        return Group(id="viagem", name="Viagem", currency="BRL")

    def list_participants(self, group_id: str) -> list[Participant]:
        return [
            Participant(id=participant_id, group_id=group_id, name=participant_id)
            for participant_id in ("ana", "bia", "caio")
        ]


@dataclass
class FakeExpenseRepository:
    records: list[ExpenseRecord] = field(default_factory=list)

    def list_expenses(
        self,
        group_id: str,
        settlement_mode: SettlementMode | None = None,
    ) -> list[ExpenseRecord]:
        _ = group_id, settlement_mode
        return self.records


def _service(*records: ExpenseRecord) -> SettlementService:
    return SettlementService(
        group_repository=FakeGroupRepository(),
        expense_repository=FakeExpenseRepository(records=list(records)),
    )


def _expense(
    expense_id: str,
    amount: int,
    paid_by: str,
    paid_for: tuple[str, ...],
    settlement_mode: SettlementMode = SettlementMode.NORMAL,
) -> ExpenseRecord:
    return ExpenseRecord(
        id=expense_id,
        title=expense_id,
        amount=amount,
        paid_by=paid_by,
        paid_for=tuple(ParticipantShare(pid) for pid in paid_for),
        settlement_mode=settlement_mode,
    )


def test_group_settlement_without_viewer() -> None:
    service = _service(_expense("e1", 900, "ana", ("ana", "bia", "caio")))

    projection = service.get_group_settlement("viagem")

    assert projection.group_id == "viagem"
    assert [
        (item.from_id, item.to_id, item.amount)
        for item in projection.settlement.normal.reimbursements
    ] == [("caio", "ana", 300), ("bia", "ana", 300)]
    assert projection.viewer_totals is None
    assert projection.stats.total_group_spending == 900
    assert projection.stats.participant_share is None


def test_group_settlement_with_viewer_adds_totals_and_stats() -> None:
    service = _service(
        _expense("e1", 900, "ana", ("ana", "bia", "caio")),
        _expense("e2", 200, "bia", ("bia", "caio"), SettlementMode.STRAIGHT),
    )

    projection = service.get_group_settlement("viagem", viewer_participant_id="caio")

    assert projection.viewer_totals == SettlementTotals(
        total_owed=400,
        total_owed_to_you=0,
        net=400,
    )
    assert projection.stats.total_group_spending == 1100
    assert projection.stats.participant_paid_for == 0
    assert projection.stats.participant_share == 400


def test_unknown_group_raises_not_found() -> None:
    with pytest.raises(GroupNotFoundError) as exc_info:
        _service().get_group_settlement("nope")

    assert exc_info.value.details == {"group_id": "nope"}


def test_viewer_outside_group_raises_not_found() -> None:
    with pytest.raises(ParticipantNotFoundError):
        _service().get_group_settlement("viagem", viewer_participant_id="zeca")


def test_person_debts_for_group_member() -> None:
    service = _service(_expense("e1", 900, "ana", ("ana", "bia", "caio")))

    debts = service.get_person_debts("viagem", "bia")

    assert [(debt.creditor_id, debt.total_amount) for debt in debts] == [("ana", 300)]
    assert service.get_person_debts("viagem", "ana") == []


def test_person_debts_rejects_unknown_participant() -> None:
    with pytest.raises(ParticipantNotFoundError):
        _service().get_person_debts("viagem", "zeca")
