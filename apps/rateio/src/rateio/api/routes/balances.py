"""Group balances and per-person debt routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from rateio.api.dependencies import get_settlement_service
from rateio.api.schemas.balances import GroupBalancesResponse
from rateio.api.schemas.debts import PersonDebtsResponse
from rateio.services.settlement_service import SettlementService

router = APIRouter(prefix="/groups/{group_id}", tags=["Balances"])


@router.get(
    "/balances",
    response_model=GroupBalancesResponse,
    responses={404: {"description": "Group or participant not found"}},
)
def get_group_balances(
    group_id: str,
    service: Annotated[SettlementService, Depends(get_settlement_service)],
    participant_id: Annotated[str | None, Query(min_length=1)] = None,
) -> GroupBalancesResponse:
    """Compute the settlement of the group from its stored expenses.

    With participant_id, the response also carries that participant's totals.
    """

    projection = service.get_group_settlement(
        group_id, viewer_participant_id=participant_id
    )
    return GroupBalancesResponse.from_projection(projection)


@router.get(
    "/participants/{participant_id}/debts",
    response_model=PersonDebtsResponse,
    responses={404: {"description": "Group or participant not found"}},
)
def get_person_debts(
    group_id: str,
    participant_id: str,
    service: Annotated[SettlementService, Depends(get_settlement_service)],
) -> PersonDebtsResponse:
    """List what one participant owes, grouped by creditor."""

    debts = service.get_person_debts(group_id, participant_id)
    return PersonDebtsResponse.from_domain(
        group_id=group_id,
        participant_id=participant_id,
        debts=debts,
    )
