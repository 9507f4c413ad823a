from __future__ import annotations

from talentdesk.db.base import Base
from talentdesk.db.session import engine, session_scope
from talentdesk.db import models  # noqa: F401
from talentdesk.db.seed import seed_company_profile


def init_database() -> dict[str, int]:
    Base.metadata.create_all(bind=engine)

    with session_scope() as session:
        inserted = seed_company_profile(session)
    return {"seeded_company_profiles": inserted}
