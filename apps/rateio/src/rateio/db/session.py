"""Engine and per-request sessions for the expenses database."""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from rateio.core.settings import get_settings

engine = create_engine(get_settings().database_url, pool_pre_ping=True)

# lease toggles return the refreshed row after commit
SessionFactory = sessionmaker(
    bind=engine,
    class_=Session,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_db_session() -> Generator[Session, None, None]:
    """Open one session per request; services decide when to commit."""

    with SessionFactory() as session:
        yield session
