"""Business service exposing group settlement projections."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from rateio.db.models.group import Group
from rateio.db.models.participant import Participant
from rateio.domain.errors import (
    GroupNotFoundError,
    ParticipantNotFoundError,
    compose_error_message,
)
from rateio.domain.expenses import ExpenseRecord, SettlementMode
from rateio.domain.services.person_debts import (
    CreditorDebt,
    get_person_debts,
    get_viewer_totals,
)
from rateio.domain.services.settlement import (
    SettlementBalances,
    SettlementTotals,
    get_settlement_balances,
)
from rateio.domain.services.totals import (
    get_total_group_spending,
    get_total_participant_paid_for,
    get_total_participant_share,
)

logger = logging.getLogger(__name__)


class GroupRepositoryProtocol(Protocol):
    """Group repository contract used by settlement service."""

    def get_group(self, group_id: str) -> Group | None: ...

    def list_participants(self, group_id: str) -> list[Participant]: ...


class ExpenseRepositoryProtocol(Protocol):
    """Read repository contract used by settlement service."""

    def list_expenses(
        self,
        group_id: str,
        settlement_mode: SettlementMode | None = None,
    ) -> list[ExpenseRecord]: ...


@dataclass(frozen=True, slots=True)
class SpendingStats:
    """Spending statistics of a group, optionally for one participant."""

    total_group_spending: int
    participant_paid_for: int | None = None
    participant_share: int | None = None


@dataclass(frozen=True, slots=True)
class GroupSettlementProjection:
    """Settlement of a group plus the optional per-viewer totals."""

    group_id: str
    settlement: SettlementBalances
    stats: SpendingStats
    viewer_totals: SettlementTotals | None = None


class SettlementService:
    """Computes settlement views fresh from the stored expenses."""

    def __init__(
        self,
        *,
        group_repository: GroupRepositoryProtocol,
        expense_repository: ExpenseRepositoryProtocol,
    ) -> None:
        self._group_repository = group_repository
        self._expense_repository = expense_repository

    def get_group_settlement(
        self,
        group_id: str,
        *,
        viewer_participant_id: str | None = None,
    ) -> GroupSettlementProjection:
        self._require_group(group_id)
        if viewer_participant_id is not None:
            self._require_participant(group_id, viewer_participant_id)

        expenses = self._expense_repository.list_expenses(group_id)
        settlement = get_settlement_balances(expenses)

        viewer_totals: SettlementTotals | None = None
        participant_paid_for: int | None = None
        participant_share: int | None = None
        if viewer_participant_id is not None:
            viewer_totals = get_viewer_totals(viewer_participant_id, settlement)
            participant_paid_for = get_total_participant_paid_for(
                viewer_participant_id, expenses
            )
            participant_share = get_total_participant_share(
                viewer_participant_id, expenses
            )
        stats = SpendingStats(
            total_group_spending=get_total_group_spending(expenses),
            participant_paid_for=participant_paid_for,
            participant_share=participant_share,
        )

        logger.info(
            "group_settlement_computed",
            extra={
                "group_id": group_id,
                "expenses": len(expenses),
                "reimbursements": len(settlement.normal.reimbursements),
                "viewer_participant_id": viewer_participant_id,
            },
        )
        return GroupSettlementProjection(
            group_id=group_id,
            settlement=settlement,
            stats=stats,
            viewer_totals=viewer_totals,
        )

    def get_person_debts(
        self,
        group_id: str,
        participant_id: str,
    ) -> list[CreditorDebt]:
        self._require_group(group_id)
        self._require_participant(group_id, participant_id)

        settlement = get_settlement_balances(
            self._expense_repository.list_expenses(group_id)
        )
        return get_person_debts(
            participant_id,
            settlement.normal.reimbursements,
            settlement.straight,
            settlement.lease,
        )

    def _require_group(self, group_id: str) -> Group:
        group = self._group_repository.get_group(group_id)
        if group is None:
            raise GroupNotFoundError(details={"group_id": group_id})
        return group

    def _require_participant(self, group_id: str, participant_id: str) -> None:
        participant_ids = {
            participant.id
            for participant in self._group_repository.list_participants(group_id)
        }
        if participant_id not in participant_ids:
            raise ParticipantNotFoundError(
                message=compose_error_message(
                    cause="participant_id does not belong to this group.",
                    action="Use one of the group participant ids and retry.",
                ),
                details={"group_id": group_id, "participant_id": participant_id},
            )
