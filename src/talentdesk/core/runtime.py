from __future__ import annotations

from talentdesk.config import get_settings
from talentdesk.core.events import EventBus
from talentdesk.core.matching import recommend_candidates
from talentdesk.core.scheduler import MatchScheduler
from talentdesk.db.repositories import Repository
from talentdesk.db.session import session_scope
from talentdesk.llm.router import LLMRouter
from talentdesk.types import RecommendedCandidate

_EVENT_BUS: EventBus | None = None
_MATCH_SCHEDULER: MatchScheduler | None = None


def get_event_bus() -> EventBus:
    global _EVENT_BUS
    if _EVENT_BUS is None:
        _EVENT_BUS = EventBus()
    return _EVENT_BUS


def run_matching(job_description: str, router: LLMRouter | None = None) -> list[RecommendedCandidate]:
    with session_scope() as db:
        entries = Repository(db).all_profile_entries()
    return recommend_candidates(router or LLMRouter(), job_description=job_description, entries=entries)


def count_profile_candidates() -> int:
    with session_scope() as db:
        return len(Repository(db).all_profile_entries())


def get_match_scheduler() -> MatchScheduler:
    global _MATCH_SCHEDULER
    if _MATCH_SCHEDULER is None:
        _MATCH_SCHEDULER = MatchScheduler(
            run_matching,
            delay_sec=get_settings().match_debounce_sec,
            event_bus=get_event_bus(),
            candidate_counter=count_profile_candidates,
        )
    return _MATCH_SCHEDULER
