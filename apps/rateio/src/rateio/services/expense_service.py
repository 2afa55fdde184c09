"""Business service for expense registration and listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from rateio.db.models.expense import (
    Expense,
    ExpensePaidFor,
    ExpenseSubItem,
    ExpenseSubItemPaidFor,
)
from rateio.db.models.group import Group
from rateio.db.models.participant import Participant
from rateio.domain.errors import (
    GroupNotFoundError,
    InvalidRequestError,
    compose_error_message,
)
from rateio.domain.expenses import (
    ExpenseRecord,
    ParticipantShare,
    SettlementMode,
    SplitMode,
    SubItem,
    resolve_split_mode,
)
from rateio.domain.services.share_validation import validate_expense_shares
from rateio.repositories.expense_repository import expense_to_record

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...
    def refresh(self, instance: object) -> None: ...


class ExpenseRepositoryProtocol(Protocol):
    """Expense repository contract consumed by expense service."""

    def list_expenses(
        self,
        group_id: str,
        settlement_mode: SettlementMode | None = None,
    ) -> list[ExpenseRecord]: ...

    def add(self, expense: Expense) -> Expense: ...


class GroupRepositoryProtocol(Protocol):
    """Group repository contract consumed by expense service."""

    def get_group(self, group_id: str) -> Group | None: ...

    def list_participants(self, group_id: str) -> list[Participant]: ...


@dataclass(slots=True, frozen=True)
class CreateExpenseInput:
    """Input model for expense creation."""

    group_id: str
    title: str
    amount: int
    paid_by: str
    paid_for: tuple[ParticipantShare, ...]
    split_mode: SplitMode = SplitMode.EVENLY
    settlement_mode: SettlementMode = SettlementMode.NORMAL
    sub_items: tuple[SubItem, ...] = ()
    expense_date: date | None = None
    is_reimbursement: bool = False
    lease_owner_id: str | None = None
    lease_item_name: str | None = None
    lease_buyback_date: date | None = None

    def to_record(self, expense_id: str = "") -> ExpenseRecord:
        return ExpenseRecord(
            id=expense_id,
            title=self.title,
            amount=self.amount,
            paid_by=self.paid_by,
            paid_for=self.paid_for,
            split_mode=self.split_mode,
            settlement_mode=self.settlement_mode,
            sub_items=self.sub_items,
            expense_date=self.expense_date,
            is_reimbursement=self.is_reimbursement,
            lease_owner_id=self.lease_owner_id,
            lease_item_name=self.lease_item_name,
            lease_buyback_date=self.lease_buyback_date,
        )


class ExpenseService:
    """Registers expenses after checking them against the group."""

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

    def list_expenses(
        self,
        group_id: str,
        settlement_mode: SettlementMode | None = None,
    ) -> list[ExpenseRecord]:
        if self._group_repository.get_group(group_id) is None:
            raise GroupNotFoundError(details={"group_id": group_id})
        return self._expense_repository.list_expenses(group_id, settlement_mode)

    def create_expense(self, payload: CreateExpenseInput) -> ExpenseRecord:
        if self._group_repository.get_group(payload.group_id) is None:
            raise GroupNotFoundError(details={"group_id": payload.group_id})

        participant_ids = {
            participant.id
            for participant in self._group_repository.list_participants(
                payload.group_id
            )
        }
        unknown_ids = sorted(
            self._referenced_participant_ids(payload) - participant_ids
        )
        if unknown_ids:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Expense references participants outside this group.",
                    action="Use only participant ids of the group and retry.",
                ),
                details={"participant_ids": unknown_ids},
            )

        title = payload.title.strip()
        if not title:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Expense title is empty.",
                    action="Provide a non-empty title.",
                )
            )
        if payload.amount <= 0:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Amount must be greater than zero.",
                    action="Provide a positive amount in minor units.",
                )
            )

        validate_expense_shares(payload.to_record())

        try:
            expense = self._build_expense(payload, title=title)
            created_expense = self._expense_repository.add(expense)
            self._session.commit()
            self._session.refresh(created_expense)
            logger.info(
                "expense_created",
                extra={
                    "group_id": payload.group_id,
                    "expense_id": created_expense.id,
                    "settlement_mode": payload.settlement_mode.value,
                    "split_mode": payload.split_mode.value,
                },
            )
            return expense_to_record(created_expense)
        except Exception:
            self._session.rollback()
            raise

    @staticmethod
    def _referenced_participant_ids(payload: CreateExpenseInput) -> set[str]:
        referenced = {payload.paid_by}
        referenced.update(entry.participant_id for entry in payload.paid_for)
        for sub_item in payload.sub_items:
            referenced.update(entry.participant_id for entry in sub_item.paid_for)
        if payload.lease_owner_id is not None:
            referenced.add(payload.lease_owner_id)
        return referenced

    @staticmethod
    def _build_expense(payload: CreateExpenseInput, *, title: str) -> Expense:
        is_lease = payload.settlement_mode == SettlementMode.LEASE
        expense = Expense(
            group_id=payload.group_id,
            title=title,
            amount=payload.amount,
            paid_by_id=payload.paid_by,
            split_mode=payload.split_mode,
            settlement_mode=payload.settlement_mode,
            is_reimbursement=payload.is_reimbursement,
            lease_owner_id=payload.lease_owner_id if is_lease else None,
            lease_item_name=payload.lease_item_name if is_lease else None,
            lease_buyback_date=payload.lease_buyback_date if is_lease else None,
            lease_buyback_active=False,
            lease_buyback_completed=False,
        )
        if payload.expense_date is not None:
            expense.expense_date = payload.expense_date

        expense.paid_for = [
            ExpensePaidFor(
                participant_id=entry.participant_id,
                shares=entry.shares,
                position=position,
            )
            for position, entry in enumerate(payload.paid_for)
        ]
        expense.sub_items = [
            ExpenseSubItem(
                title=sub_item.title or title,
                amount=sub_item.amount,
                split_mode=resolve_split_mode(sub_item.split_mode),
                position=position,
                paid_for=[
                    ExpenseSubItemPaidFor(
                        participant_id=entry.participant_id,
                        shares=entry.shares,
                        position=entry_position,
                    )
                    for entry_position, entry in enumerate(sub_item.paid_for)
                ],
            )
            for position, sub_item in enumerate(payload.sub_items)
        ]
        return expense
