"""Participants routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from rateio.api.dependencies import get_group_repository
from rateio.api.schemas.participants import ParticipantsListResponse
from rateio.domain.errors import GroupNotFoundError
from rateio.repositories.group_repository import GroupRepository

router = APIRouter(prefix="/groups/{group_id}/participants", tags=["Participants"])


@router.get(
    "",
    response_model=ParticipantsListResponse,
    responses={404: {"description": "Group not found"}},
)
def list_participants(
    group_id: str,
    repository: Annotated[GroupRepository, Depends(get_group_repository)],
) -> ParticipantsListResponse:
    """List the participants of one group."""

    if repository.get_group(group_id) is None:
        raise GroupNotFoundError(details={"group_id": group_id})
    participants = repository.list_participants(group_id)
    return ParticipantsListResponse.from_models(group_id, participants)
