from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from talentdesk.db.models import CompanyProfile

DEFAULT_COMPANY_PROFILE: dict[str, str] = {
    "name": "Acme Corp",
    "culture": (
        "A collaborative, growth-focused environment valuing transparency and continuous learning."
    ),
    "org_structure": (
        "Hierarchical with a flat management layer in engineering. Report to managers, not directors."
    ),
    "guidelines": "Use inclusive, plain language. Avoid urgency and competitive jargon.",
}


def seed_company_profile(session: Session) -> int:
    existing = session.scalar(select(CompanyProfile).limit(1))
    if existing is not None:
        return 0

    session.add(CompanyProfile(**DEFAULT_COMPANY_PROFILE))
    session.commit()
    return 1
