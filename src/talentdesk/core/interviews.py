from __future__ import annotations

from talentdesk.llm.prompts import INTERVIEW_PROMPT, INTERVIEW_SYSTEM_PROMPT
from talentdesk.llm.router import LLMRouter
from talentdesk.types import CompanyProfileData


def generate_interview_questions(
    router: LLMRouter,
    company: CompanyProfileData,
    *,
    job_title: str,
    key_skills: str,
    experience: str,
    technical_count: int = 4,
    behavioral_count: int = 4,
    culture_count: int = 4,
) -> str:
    system_prompt = INTERVIEW_SYSTEM_PROMPT.format(
        company_name=company.name,
        culture=company.culture,
        org_structure=company.org_structure,
    )
    user_query = INTERVIEW_PROMPT.format(
        technical_count=technical_count,
        behavioral_count=behavioral_count,
        culture_count=culture_count,
        experience=experience,
        job_title=job_title,
        key_skills=key_skills,
    )
    return router.generate_text(user_query, system_prompt)
