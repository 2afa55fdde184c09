"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from rateio.db.session import get_db_session
from rateio.repositories.expense_repository import ExpenseRepository
from rateio.repositories.group_repository import GroupRepository
from rateio.services.expense_service import ExpenseService
from rateio.services.lease_service import LeaseService
from rateio.services.settlement_service import SettlementService


def get_group_repository(
    session: Annotated[Session, Depends(get_db_session)],
) -> GroupRepository:
    """Build group repository with per-request session."""

    return GroupRepository(session)


def get_settlement_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> SettlementService:
    """Build read-only settlement service with per-request session."""

    return SettlementService(
        group_repository=GroupRepository(session),
        expense_repository=ExpenseRepository(session),
    )


def get_expense_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> ExpenseService:
    """Build expense service with per-request session."""

    return ExpenseService(
        expense_repository=ExpenseRepository(session),
        group_repository=GroupRepository(session),
        session=session,
    )


def get_lease_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> LeaseService:
    """Build lease command service with per-request session."""

    return LeaseService(
        expense_repository=ExpenseRepository(session),
        group_repository=GroupRepository(session),
        session=session,
    )
