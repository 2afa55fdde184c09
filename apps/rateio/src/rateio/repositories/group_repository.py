"""Group and participant persistence operations."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from rateio.db.models.group import Group
from rateio.db.models.participant import Participant


class GroupRepository:
    """Repository for groups and their participants."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_group(self, group_id: str) -> Group | None:
        return self._session.get(Group, group_id)

    def list_participants(self, group_id: str) -> list[Participant]:
        statement = (
            select(Participant)
            .where(Participant.group_id == group_id)
            .order_by(Participant.name.asc(), Participant.id.asc())
        )
        return list(self._session.scalars(statement).all())
