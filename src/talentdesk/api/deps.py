from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from talentdesk.core.runtime import get_match_scheduler
from talentdesk.core.scheduler import MatchScheduler
from talentdesk.db.repositories import Repository
from talentdesk.db.session import get_db_session
from talentdesk.llm.router import LLMRouter


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_repository(db: Session = Depends(get_db)) -> Repository:
    return Repository(db)


def get_llm_router() -> LLMRouter:
    return LLMRouter()


def get_scheduler() -> MatchScheduler:
    return get_match_scheduler()
