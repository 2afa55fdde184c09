"""Pydantic schemas for participants endpoints."""

from __future__ import annotations

from pydantic import BaseModel

from rateio.db.models.participant import Participant


class ParticipantResponse(BaseModel):
    """Public participant representation."""

    id: str
    name: str

    @classmethod
    def from_model(cls, participant: Participant) -> ParticipantResponse:
        return cls(id=participant.id, name=participant.name)


class ParticipantsListResponse(BaseModel):
    """Participants list payload."""

    group_id: str
    participants: list[ParticipantResponse]

    @classmethod
    def from_models(
        cls,
        group_id: str,
        participants: list[Participant],
    ) -> ParticipantsListResponse:
        return cls(
            group_id=group_id,
            participants=[ParticipantResponse.from_model(p) for p in participants],
        )
