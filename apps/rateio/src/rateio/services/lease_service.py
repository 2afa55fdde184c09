"""Business service for lease buy-back and buy-in toggles."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from rateio.db.models.expense import Expense
from rateio.db.models.participant import Participant
from rateio.domain.errors import (
    ExpenseNotFoundError,
    ParticipantNotFoundError,
    compose_error_message,
)
from rateio.domain.expenses import ExpenseRecord
from rateio.domain.services.lease_items import (
    toggle_buy_in_payment,
    toggle_buyback_active,
    toggle_buyback_completed,
)
from rateio.repositories.expense_repository import expense_to_record

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...
    def refresh(self, instance: object) -> None: ...


class ExpenseRepositoryProtocol(Protocol):
    """Expense repository contract consumed by lease service."""

    def get_expense_for_update(
        self,
        group_id: str,
        expense_id: str,
    ) -> Expense | None: ...

    def apply_lease_state(self, expense: Expense, record: ExpenseRecord) -> Expense: ...


class GroupRepositoryProtocol(Protocol):
    """Group repository contract consumed by lease service."""

    def list_participants(self, group_id: str) -> list[Participant]: ...


@dataclass(slots=True, frozen=True)
class ToggleLeaseInput:
    """Target expense of a buy-back toggle."""

    group_id: str
    expense_id: str


@dataclass(slots=True, frozen=True)
class ToggleBuyInInput:
    """Target buy-in share of a paid/unpaid toggle."""

    group_id: str
    expense_id: str
    participant_id: str


class LeaseService:
    """Applies owner commands to the mutable lease state of an expense."""

    def __init__(
        self,
        *,
        expense_repository: ExpenseRepositoryProtocol,
        group_repository: GroupRepositoryProtocol,
        session: SessionProtocol,
    ) -> None:
        self._expense_repository = expense_repository
        self._group_repository = group_repository
        self._session = session

    def toggle_buyback_completed(self, payload: ToggleLeaseInput) -> ExpenseRecord:
        """Mark a lease buy-back as settled, or reopen it."""

        return self._apply(
            group_id=payload.group_id,
            expense_id=payload.expense_id,
            event="lease_buyback_completed_toggled",
            transition=toggle_buyback_completed,
        )

    def toggle_buyback_active(self, payload: ToggleLeaseInput) -> ExpenseRecord:
        """Offer a lease buy-back, or retract the offer."""

        return self._apply(
            group_id=payload.group_id,
            expense_id=payload.expense_id,
            event="lease_buyback_active_toggled",
            transition=toggle_buyback_active,
        )

    def toggle_buy_in(self, payload: ToggleBuyInInput) -> ExpenseRecord:
        """Flip whether one co-user already paid their buy-in."""

        participant_ids = {
            participant.id
            for participant in self._group_repository.list_participants(
                payload.group_id
            )
        }
        if payload.participant_id not in participant_ids:
            raise ParticipantNotFoundError(
                message=compose_error_message(
                    cause="participant_id does not belong to this group.",
                    action="Use one of the group participant ids and retry.",
                ),
                details={"participant_id": payload.participant_id},
            )

        return self._apply(
            group_id=payload.group_id,
            expense_id=payload.expense_id,
            event="lease_buy_in_toggled",
            transition=lambda record: toggle_buy_in_payment(
                record, payload.participant_id
            ),
        )

    def _apply(
        self,
        *,
        group_id: str,
        expense_id: str,
        event: str,
        transition: Callable[[ExpenseRecord], ExpenseRecord],
    ) -> ExpenseRecord:
        expense = self._expense_repository.get_expense_for_update(group_id, expense_id)
        if expense is None:
            raise ExpenseNotFoundError(
                details={"group_id": group_id, "expense_id": expense_id}
            )

        updated_record = transition(expense_to_record(expense))

        try:
            self._expense_repository.apply_lease_state(expense, updated_record)
            self._session.commit()
            self._session.refresh(expense)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            event,
            extra={
                "group_id": group_id,
                "expense_id": expense_id,
                "buyback_active": updated_record.lease_buyback_active,
                "buyback_completed": updated_record.lease_buyback_completed,
                "buy_in_payments": sorted(updated_record.lease_buy_in_payments),
            },
        )
        return updated_record
