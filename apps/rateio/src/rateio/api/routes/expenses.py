"""Expense routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from rateio.api.dependencies import get_expense_service
from rateio.api.schemas.expenses import (
    CreateExpenseRequest,
    ExpenseListResponse,
    ExpenseResponse,
)
from rateio.domain.expenses import SettlementMode
from rateio.services.expense_service import ExpenseService

router = APIRouter(prefix="/groups/{group_id}/expenses", tags=["Expenses"])


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid payload"},
        404: {"description": "Group not found"},
        422: {"description": "Shares do not add up"},
    },
)
def create_expense(
    group_id: str,
    payload: CreateExpenseRequest,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
) -> ExpenseResponse:
    """Register one expense in the group."""

    record = service.create_expense(payload.to_input(group_id))
    return ExpenseResponse.from_record(record)


@router.get(
    "",
    response_model=ExpenseListResponse,
    responses={
        400: {"description": "Invalid query filters"},
        404: {"description": "Group not found"},
    },
)
def list_expenses(
    group_id: str,
    service: Annotated[ExpenseService, Depends(get_expense_service)],
    settlement_mode: Annotated[SettlementMode | None, Query()] = None,
) -> ExpenseListResponse:
    """List group expenses, optionally restricted to one settlement mode."""

    records = service.list_expenses(group_id, settlement_mode)
    return ExpenseListResponse.from_records(group_id, records)
