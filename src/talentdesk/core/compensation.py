from __future__ import annotations

from talentdesk.llm.prompts import COMPENSATION_PROMPT, COMPENSATION_SYSTEM_PROMPT
from talentdesk.llm.router import LLMRouter


def calculate_compensation(
    router: LLMRouter,
    *,
    job_title: str,
    experience: str,
    location: str,
    industry: str,
    company_name: str,
) -> str:
    system_prompt = COMPENSATION_SYSTEM_PROMPT.format(company_name=company_name)
    user_query = COMPENSATION_PROMPT.format(
        experience=experience,
        job_title=job_title,
        location=location,
        industry=industry,
    )
    return router.generate_text(user_query, system_prompt, use_search=True)
