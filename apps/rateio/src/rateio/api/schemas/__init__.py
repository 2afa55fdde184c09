"""API request and response schemas."""

from rateio.api.schemas.balances import GroupBalancesResponse
from rateio.api.schemas.debts import PersonDebtsResponse
from rateio.api.schemas.expenses import (
    CreateExpenseRequest,
    ExpenseListResponse,
    ExpenseResponse,
)
from rateio.api.schemas.participants import ParticipantsListResponse

__all__ = [
    "CreateExpenseRequest",
    "ExpenseListResponse",
    "ExpenseResponse",
    "GroupBalancesResponse",
    "ParticipantsListResponse",
    "PersonDebtsResponse",
]
