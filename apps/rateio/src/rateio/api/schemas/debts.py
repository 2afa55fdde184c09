"""Schemas for the per-person debts endpoint."""

from __future__ import annotations

from pydantic import BaseModel

from rateio.domain.services.person_debts import (
    CreditorDebt,
    PersonDebtItem,
    PersonDebtType,
)


class PersonDebtItemResponse(BaseModel):
    """One obligation towards a creditor."""

    type: PersonDebtType
    amount: int
    expense_id: str | None = None
    expense_title: str | None = None
    lease_item_name: str | None = None
    lease_expense_id: str | None = None
    buy_in_participant_id: str | None = None

    @classmethod
    def from_domain(cls, item: PersonDebtItem) -> PersonDebtItemResponse:
        return cls(
            type=item.type,
            amount=item.amount,
            expense_id=item.expense_id,
            expense_title=item.expense_title,
            lease_item_name=item.lease_item_name,
            lease_expense_id=item.lease_expense_id,
            buy_in_participant_id=item.buy_in_participant_id,
        )


class CreditorDebtResponse(BaseModel):
    creditor_id: str
    total_amount: int
    items: list[PersonDebtItemResponse]


class PersonDebtsResponse(BaseModel):
    """Everything one participant owes, grouped by creditor."""

    group_id: str
    participant_id: str
    total_owed: int
    creditors: list[CreditorDebtResponse]

    @classmethod
    def from_domain(
        cls,
        *,
        group_id: str,
        participant_id: str,
        debts: list[CreditorDebt],
    ) -> PersonDebtsResponse:
        return cls(
            group_id=group_id,
            participant_id=participant_id,
            total_owed=sum(debt.total_amount for debt in debts),
            creditors=[
                CreditorDebtResponse(
                    creditor_id=debt.creditor_id,
                    total_amount=debt.total_amount,
                    items=[PersonDebtItemResponse.from_domain(i) for i in debt.items],
                )
                for debt in debts
            ],
        )
