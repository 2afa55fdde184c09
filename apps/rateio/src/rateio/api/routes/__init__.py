"""API v1 router registration."""

from fastapi import APIRouter

from rateio.api.routes import balances, expenses, lease, participants

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(participants.router)
v1_router.include_router(expenses.router)
v1_router.include_router(balances.router)
v1_router.include_router(lease.router)
