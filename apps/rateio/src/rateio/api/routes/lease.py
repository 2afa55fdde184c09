"""Lease buy-in and buy-back toggle routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from rateio.api.dependencies import get_lease_service
from rateio.api.schemas.expenses import ExpenseResponse
from rateio.services.lease_service import (
    LeaseService,
    ToggleBuyInInput,
    ToggleLeaseInput,
)

router = APIRouter(
    prefix="/groups/{group_id}/expenses/{expense_id}/lease",
    tags=["Lease"],
)

TOGGLE_RESPONSES: dict[int | str, dict[str, str]] = {
    400: {"description": "Expense is not a lease"},
    404: {"description": "Expense or participant not found"},
}


@router.post(
    "/buyback/toggle",
    response_model=ExpenseResponse,
    responses=TOGGLE_RESPONSES,
)
def toggle_buyback_completed(
    group_id: str,
    expense_id: str,
    service: Annotated[LeaseService, Depends(get_lease_service)],
) -> ExpenseResponse:
    """Mark the buy-back as settled, or reopen it."""

    record = service.toggle_buyback_completed(
        ToggleLeaseInput(group_id=group_id, expense_id=expense_id)
    )
    return ExpenseResponse.from_record(record)


@router.post(
    "/buyback-active/toggle",
    response_model=ExpenseResponse,
    responses=TOGGLE_RESPONSES,
)
def toggle_buyback_active(
    group_id: str,
    expense_id: str,
    service: Annotated[LeaseService, Depends(get_lease_service)],
) -> ExpenseResponse:
    """Offer the buy-back to co-users, or retract the offer."""

    record = service.toggle_buyback_active(
        ToggleLeaseInput(group_id=group_id, expense_id=expense_id)
    )
    return ExpenseResponse.from_record(record)


@router.post(
    "/buy-ins/{participant_id}/toggle",
    response_model=ExpenseResponse,
    responses=TOGGLE_RESPONSES,
)
def toggle_buy_in(
    group_id: str,
    expense_id: str,
    participant_id: str,
    service: Annotated[LeaseService, Depends(get_lease_service)],
) -> ExpenseResponse:
    """Flip whether one co-user already paid their buy-in."""

    record = service.toggle_buy_in(
        ToggleBuyInInput(
            group_id=group_id,
            expense_id=expense_id,
            participant_id=participant_id,
        )
    )
    return ExpenseResponse.from_record(record)
