from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
from datetime import date
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rateio.api.app import create_app
from rateio.db.base import Base, import_orm_models
from rateio.db.models.expense import Expense, ExpensePaidFor
from rateio.db.models.group import Group
from rateio.db.models.participant import Participant
from rateio.db.session import get_db_session
from rateio.domain.expenses import SettlementMode, SplitMode


@dataclass(frozen=True)
class SeededGroup:
    group_id: str
    participant_ids: tuple[str, ...]


@pytest.fixture
def sqlite_session_factory() -> Generator[sessionmaker[Session], None, None]:
    import_orm_models()
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)


def seed_group(
    session: Session,
    *,
    group_id: str = "viagem",
    participant_ids: tuple[str, ...] = ("ana", "bia", "caio", "duda"),
) -> SeededGroup:
    session.add(Group(id=group_id, name="Viagem"))
    session.add_all(
        [
            Participant(id=participant_id, group_id=group_id, name=participant_id)
            for participant_id in participant_ids
        ]
    )
    session.commit()
    return SeededGroup(group_id=group_id, participant_ids=participant_ids)


def seed_expense(
    session: Session,
    *,
    group_id: str,
    expense_id: str,
    amount: int,
    paid_by: str,
    paid_for: tuple[str, ...],
    settlement_mode: SettlementMode | None = SettlementMode.NORMAL,
    expense_date: date = date(2026, 3, 1),
    lease_owner_id: str | None = None,
) -> None:
    expense = Expense(
        id=expense_id,
        group_id=group_id,
        title=expense_id,
        amount=amount,
        expense_date=expense_date,
        paid_by_id=paid_by,
        split_mode=SplitMode.EVENLY,
        settlement_mode=settlement_mode,
        lease_owner_id=lease_owner_id,
        lease_item_name=f"{expense_id} item" if lease_owner_id else None,
        lease_buyback_date=date(2026, 12, 1) if lease_owner_id else None,
    )
    expense.paid_for = [
        ExpensePaidFor(participant_id=participant_id, shares=1, position=position)
        for position, participant_id in enumerate(paid_for)
    ]
    session.add(expense)
    session.commit()


@pytest.fixture
def client(
    sqlite_session_factory: sessionmaker[Session],
) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        with sqlite_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def group(sqlite_session_factory: sessionmaker[Session]) -> SeededGroup:
    with sqlite_session_factory() as session:
        return seed_group(session)


@pytest.fixture
def add_expense(
    sqlite_session_factory: sessionmaker[Session],
    group: SeededGroup,
) -> Callable[..., None]:
    def _add_expense(**kwargs: Any) -> None:
        with sqlite_session_factory() as session:
            seed_expense(session, group_id=group.group_id, **kwargs)

    return _add_expense
