"""Schemas for the group balances endpoint."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from rateio.domain.services.balances import Balance, Balances, Reimbursement
from rateio.domain.services.lease_items import LeaseItem
from rateio.domain.services.settlement import SettlementTotals, StraightBalanceItem
from rateio.services.settlement_service import GroupSettlementProjection, SpendingStats


class BalanceResponse(BaseModel):
    """Net debt position of one participant, derived from suggested transfers."""

    paid: int
    paid_for: int
    total: int

    @classmethod
    def from_domain(cls, balance: Balance) -> BalanceResponse:
        return cls(paid=balance.paid, paid_for=balance.paid_for, total=balance.total)


def _balances_payload(balances: Balances) -> dict[str, BalanceResponse]:
    return {
        participant_id: BalanceResponse.from_domain(balance)
        for participant_id, balance in balances.items()
    }


class ReimbursementResponse(BaseModel):
    """Suggested transfer that settles NORMAL expenses."""

    from_id: str = Field(serialization_alias="from")
    to_id: str = Field(serialization_alias="to")
    amount: int

    @classmethod
    def from_domain(cls, reimbursement: Reimbursement) -> ReimbursementResponse:
        return cls(
            from_id=reimbursement.from_id,
            to_id=reimbursement.to_id,
            amount=reimbursement.amount,
        )


class StraightBalanceResponse(BaseModel):
    """Direct debt created by one STRAIGHT expense."""

    expense_id: str
    expense_title: str
    from_id: str = Field(serialization_alias="from")
    to_id: str = Field(serialization_alias="to")
    amount: int

    @classmethod
    def from_domain(cls, item: StraightBalanceItem) -> StraightBalanceResponse:
        return cls(
            expense_id=item.expense_id,
            expense_title=item.expense_title,
            from_id=item.from_id,
            to_id=item.to_id,
            amount=item.amount,
        )


class BuybackShareResponse(BaseModel):
    participant_id: str
    amount: int


class BuyInShareResponse(BaseModel):
    participant_id: str
    amount: int
    paid: bool


class LeaseItemResponse(BaseModel):
    """Buy-in and buy-back breakdowns of one LEASE expense."""

    expense_id: str
    item_name: str
    total_cost: int
    owner_id: str
    buyback_date: date | None
    buyback_active: bool
    buyback_completed: bool
    buyback_breakdown: list[BuybackShareResponse]
    buy_in_breakdown: list[BuyInShareResponse]

    @classmethod
    def from_domain(cls, item: LeaseItem) -> LeaseItemResponse:
        return cls(
            expense_id=item.expense_id,
            item_name=item.item_name,
            total_cost=item.total_cost,
            owner_id=item.owner_id,
            buyback_date=item.buyback_date,
            buyback_active=item.buyback_active,
            buyback_completed=item.buyback_completed,
            buyback_breakdown=[
                BuybackShareResponse(
                    participant_id=share.participant_id, amount=share.amount
                )
                for share in item.buyback_breakdown
            ],
            buy_in_breakdown=[
                BuyInShareResponse(
                    participant_id=share.participant_id,
                    amount=share.amount,
                    paid=share.paid,
                )
                for share in item.buy_in_breakdown
            ],
        )


class SettlementTotalsResponse(BaseModel):
    total_owed: int
    total_owed_to_you: int
    net: int

    @classmethod
    def from_domain(cls, totals: SettlementTotals) -> SettlementTotalsResponse:
        return cls(
            total_owed=totals.total_owed,
            total_owed_to_you=totals.total_owed_to_you,
            net=totals.net,
        )


class SpendingStatsResponse(BaseModel):
    total_group_spending: int
    participant_paid_for: int | None = None
    participant_share: int | None = None

    @classmethod
    def from_domain(cls, stats: SpendingStats) -> SpendingStatsResponse:
        return cls(
            total_group_spending=stats.total_group_spending,
            participant_paid_for=stats.participant_paid_for,
            participant_share=stats.participant_share,
        )


class GroupBalancesResponse(BaseModel):
    """Settlement of a group across NORMAL, STRAIGHT and LEASE modes."""

    group_id: str
    balances: dict[str, BalanceResponse]
    reimbursements: list[ReimbursementResponse]
    straight: list[StraightBalanceResponse]
    lease: list[LeaseItemResponse]
    totals: SettlementTotalsResponse
    stats: SpendingStatsResponse
    viewer: SettlementTotalsResponse | None = None

    @classmethod
    def from_projection(
        cls,
        projection: GroupSettlementProjection,
    ) -> GroupBalancesResponse:
        settlement = projection.settlement
        return cls(
            group_id=projection.group_id,
            # raw paid and owed totals stay inside the engine
            balances=_balances_payload(settlement.normal.public_balances),
            reimbursements=[
                ReimbursementResponse.from_domain(item)
                for item in settlement.normal.reimbursements
            ],
            straight=[
                StraightBalanceResponse.from_domain(item)
                for item in settlement.straight
            ],
            lease=[LeaseItemResponse.from_domain(item) for item in settlement.lease],
            totals=SettlementTotalsResponse.from_domain(settlement.totals),
            stats=SpendingStatsResponse.from_domain(projection.stats),
            viewer=SettlementTotalsResponse.from_domain(projection.viewer_totals)
            if projection.viewer_totals is not None
            else None,
        )
