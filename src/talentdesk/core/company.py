from __future__ import annotations

from talentdesk.errors import InvalidInputError
from talentdesk.llm.prompts import COMPANY_FIELD_PROMPTS, COMPANY_FIELD_SYSTEM_PROMPT
from talentdesk.llm.router import LLMRouter


def generate_company_field(router: LLMRouter, *, field: str, company_name: str) -> str:
    template = COMPANY_FIELD_PROMPTS.get(field)
    if template is None:
        raise InvalidInputError("Unsupported field")
    user_query = template.format(company_name=company_name)
    return router.generate_text(user_query, COMPANY_FIELD_SYSTEM_PROMPT)
