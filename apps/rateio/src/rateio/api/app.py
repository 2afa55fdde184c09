"""FastAPI app bootstrap for rateio."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rateio.api.error_handlers import register_error_handlers
from rateio.api.routes import v1_router
from rateio.db.session import get_db_session

OPENAPI_TAGS = [
    {"name": "Participants", "description": "Members of an expense group."},
    {"name": "Expenses", "description": "Shared expenses and their splits."},
    {"name": "Balances", "description": "Settlement computed from expenses."},
    {"name": "Lease", "description": "Buy-in and buy-back state of leased items."},
]


def create_app() -> FastAPI:
    """Create and configure FastAPI application instance."""

    app = FastAPI(
        title="Rateio API",
        version="0.1.0",
        description="Group expense sharing with settlement and lease tracking.",
        openapi_tags=OPENAPI_TAGS,
    )

    @app.get("/health/live", include_in_schema=False)
    def health_live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health/ready", include_in_schema=False)
    def health_ready(
        db_session: Annotated[Session, Depends(get_db_session)],
    ) -> dict[str, str]:
        try:
            db_session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database is unavailable",
            ) from exc
        return {"status": "ready"}

    register_error_handlers(app)
    app.include_router(v1_router)
    return app


app = create_app()
