"""Schemas for expense endpoints.

Amounts travel as integers in minor currency units. Shares follow the split
mode: weights for BY_SHARES, basis points for BY_PERCENTAGE, minor units
for BY_AMOUNT, ignored for EVENLY.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from rateio.domain.expenses import (
    ExpenseRecord,
    ParticipantShare,
    SettlementMode,
    SplitMode,
    SubItem,
    resolve_split_mode,
)
from rateio.services.expense_service import CreateExpenseInput

LEASE_ITEM_NAME_MIN_LENGTH = 2


class ParticipantSharePayload(BaseModel):
    """Recipient of a split and its share."""

    participant_id: str = Field(min_length=1)
    shares: int = 1

    def to_domain(self) -> ParticipantShare:
        return ParticipantShare(participant_id=self.participant_id, shares=self.shares)

    @classmethod
    def from_domain(cls, share: ParticipantShare) -> ParticipantSharePayload:
        return cls(participant_id=share.participant_id, shares=share.shares)


class SubItemPayload(BaseModel):
    """Part of an expense split among its own participants."""

    title: str | None = Field(default=None, max_length=280)
    amount: int = Field(ge=0)
    split_mode: SplitMode = SplitMode.EVENLY
    paid_for: list[ParticipantSharePayload]

    def to_domain(self) -> SubItem:
        return SubItem(
            amount=self.amount,
            split_mode=self.split_mode,
            title=self.title,
            paid_for=tuple(entry.to_domain() for entry in self.paid_for),
        )

    @classmethod
    def from_domain(cls, sub_item: SubItem) -> SubItemPayload:
        return cls(
            title=sub_item.title,
            amount=sub_item.amount,
            split_mode=resolve_split_mode(sub_item.split_mode),
            paid_for=[
                ParticipantSharePayload.from_domain(s) for s in sub_item.paid_for
            ],
        )


class CreateExpenseRequest(BaseModel):
    """Payload for expense creation."""

    title: str = Field(min_length=1, max_length=280)
    amount: int = Field(gt=0)
    paid_by: str = Field(min_length=1)
    paid_for: list[ParticipantSharePayload] = Field(min_length=1)
    split_mode: SplitMode = SplitMode.EVENLY
    settlement_mode: SettlementMode = SettlementMode.NORMAL
    sub_items: list[SubItemPayload] = Field(default_factory=list)
    expense_date: date | None = None
    is_reimbursement: bool = False
    lease_owner_id: str | None = None
    lease_item_name: str | None = Field(default=None, max_length=280)
    lease_buyback_date: date | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Title cannot be blank.")
        return trimmed

    @field_validator("lease_item_name")
    @classmethod
    def validate_lease_item_name(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip()

    @model_validator(mode="after")
    def validate_lease_fields(self) -> CreateExpenseRequest:
        if self.settlement_mode != SettlementMode.LEASE:
            return self

        if not self.lease_owner_id:
            raise ValueError("LEASE expenses require lease_owner_id.")
        if (
            self.lease_item_name is None
            or len(self.lease_item_name) < LEASE_ITEM_NAME_MIN_LENGTH
        ):
            raise ValueError(
                "LEASE expenses require lease_item_name with at least "
                f"{LEASE_ITEM_NAME_MIN_LENGTH} characters."
            )
        if self.lease_buyback_date is None:
            raise ValueError("LEASE expenses require lease_buyback_date.")
        return self

    def to_input(self, group_id: str) -> CreateExpenseInput:
        return CreateExpenseInput(
            group_id=group_id,
            title=self.title,
            amount=self.amount,
            paid_by=self.paid_by,
            paid_for=tuple(entry.to_domain() for entry in self.paid_for),
            split_mode=self.split_mode,
            settlement_mode=self.settlement_mode,
            sub_items=tuple(sub_item.to_domain() for sub_item in self.sub_items),
            expense_date=self.expense_date,
            is_reimbursement=self.is_reimbursement,
            lease_owner_id=self.lease_owner_id,
            lease_item_name=self.lease_item_name,
            lease_buyback_date=self.lease_buyback_date,
        )


class ExpenseResponse(BaseModel):
    """Serialized expense returned by API and read back by the CLI."""

    id: str
    title: str
    amount: int
    paid_by: str
    paid_for: list[ParticipantSharePayload]
    split_mode: SplitMode = SplitMode.EVENLY
    settlement_mode: SettlementMode = SettlementMode.NORMAL
    sub_items: list[SubItemPayload] = Field(default_factory=list)
    expense_date: date | None = None
    is_reimbursement: bool = False
    lease_owner_id: str | None = None
    lease_item_name: str | None = None
    lease_buyback_date: date | None = None
    lease_buyback_active: bool = False
    lease_buyback_completed: bool = False
    lease_buy_in_payments: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: ExpenseRecord) -> ExpenseResponse:
        return cls(
            id=record.id,
            title=record.title,
            amount=record.amount,
            paid_by=record.paid_by,
            paid_for=[
                ParticipantSharePayload.from_domain(entry) for entry in record.paid_for
            ],
            split_mode=resolve_split_mode(record.split_mode),
            settlement_mode=record.effective_settlement_mode,
            sub_items=[
                SubItemPayload.from_domain(sub_item) for sub_item in record.sub_items
            ],
            expense_date=record.expense_date,
            is_reimbursement=record.is_reimbursement,
            lease_owner_id=record.lease_owner_id,
            lease_item_name=record.lease_item_name,
            lease_buyback_date=record.lease_buyback_date,
            lease_buyback_active=record.lease_buyback_active,
            lease_buyback_completed=record.lease_buyback_completed,
            lease_buy_in_payments=sorted(record.lease_buy_in_payments),
        )

    def to_record(self) -> ExpenseRecord:
        return ExpenseRecord(
            id=self.id,
            title=self.title,
            amount=self.amount,
            paid_by=self.paid_by,
            paid_for=tuple(entry.to_domain() for entry in self.paid_for),
            split_mode=self.split_mode,
            settlement_mode=self.settlement_mode,
            sub_items=tuple(sub_item.to_domain() for sub_item in self.sub_items),
            expense_date=self.expense_date,
            is_reimbursement=self.is_reimbursement,
            lease_owner_id=self.lease_owner_id,
            lease_item_name=self.lease_item_name,
            lease_buyback_date=self.lease_buyback_date,
            lease_buyback_active=self.lease_buyback_active,
            lease_buyback_completed=self.lease_buyback_completed,
            lease_buy_in_payments=frozenset(self.lease_buy_in_payments),
        )


class ExpenseListResponse(BaseModel):
    """Expense list payload."""

    group_id: str
    expenses: list[ExpenseResponse]

    @classmethod
    def from_records(
        cls,
        group_id: str,
        records: list[ExpenseRecord],
    ) -> ExpenseListResponse:
        return cls(
            group_id=group_id,
            expenses=[ExpenseResponse.from_record(record) for record in records],
        )

    def to_records(self) -> list[ExpenseRecord]:
        return [expense.to_record() for expense in self.expenses]
