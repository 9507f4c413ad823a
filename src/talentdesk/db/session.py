from __future__ import annotations

import threading
from collections.abc import Generator, Iterator
from contextlib import contextmanager, nullcontext

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from talentdesk.config import get_settings

IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


def _engine_options(database_url: str) -> dict:
    if not database_url.startswith("sqlite"):
        return {}
    options: dict = {"connect_args": {"check_same_thread": False}}
    if database_url in IN_MEMORY_URLS:
        # one shared connection keeps the in-memory database alive for the process
        options["poolclass"] = StaticPool
    return options


settings = get_settings()
engine = create_engine(settings.database_url, future=True, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

# sessions on the shared connection share its transaction, so only one may be open at a time
_shared_connection_lock = threading.Lock() if settings.database_url in IN_MEMORY_URLS else None


@contextmanager
def session_scope() -> Iterator[Session]:
    """Open a session, waiting for any other session on a shared connection to close first."""
    guard = _shared_connection_lock if _shared_connection_lock is not None else nullcontext()
    with guard:
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()


def get_db_session() -> Generator[Session, None, None]:
    with session_scope() as db:
        yield db
