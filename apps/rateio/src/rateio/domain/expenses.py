"""Expense records consumed by the settlement engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date


class SplitMode(enum.StrEnum):
    """How an amount is divided among its recipients."""

    EVENLY = "EVENLY"
    BY_SHARES = "BY_SHARES"
    BY_PERCENTAGE = "BY_PERCENTAGE"
    BY_AMOUNT = "BY_AMOUNT"


class SettlementMode(enum.StrEnum):
    """How the debt produced by one expense is resolved."""

    NORMAL = "NORMAL"
    STRAIGHT = "STRAIGHT"
    LEASE = "LEASE"


PERCENTAGE_TOTAL_BASIS_POINTS = 10000


def resolve_split_mode(value: SplitMode | str | None) -> SplitMode:
    """Return a known split mode, falling back to EVENLY."""

    if isinstance(value, SplitMode):
        return value
    try:
        return SplitMode(value)
    except ValueError:
        return SplitMode.EVENLY


def resolve_settlement_mode(value: SettlementMode | str | None) -> SettlementMode:
    """Return a known settlement mode; legacy records without one are NORMAL."""

    if isinstance(value, SettlementMode):
        return value
    try:
        return SettlementMode(value)
    except ValueError:
        return SettlementMode.NORMAL


@dataclass(frozen=True, slots=True)
class ParticipantShare:
    """One recipient of a split; meaning of shares depends on the split mode."""

    participant_id: str
    shares: int = 1


@dataclass(frozen=True, slots=True)
class SubItem:
    """Portion of an expense split among its own subset of participants."""

    amount: int
    paid_for: tuple[ParticipantShare, ...]
    split_mode: SplitMode | str | None = SplitMode.EVENLY
    title: str | None = None


@dataclass(frozen=True, slots=True)
class ExpenseRecord:
    """Already-validated expense snapshot supplied by the data-access layer."""

    id: str
    title: str
    amount: int
    paid_by: str
    paid_for: tuple[ParticipantShare, ...]
    split_mode: SplitMode | str | None = SplitMode.EVENLY
    settlement_mode: SettlementMode | str | None = None
    sub_items: tuple[SubItem, ...] = ()
    expense_date: date | None = None
    is_reimbursement: bool = False
    lease_owner_id: str | None = None
    lease_item_name: str | None = None
    lease_buyback_date: date | None = None
    lease_buyback_active: bool = False
    lease_buyback_completed: bool = False
    lease_buy_in_payments: frozenset[str] = field(default_factory=frozenset)

    @property
    def effective_settlement_mode(self) -> SettlementMode:
        return resolve_settlement_mode(self.settlement_mode)

    @property
    def lease_owner(self) -> str:
        return self.lease_owner_id or self.paid_by
