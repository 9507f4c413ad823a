from __future__ import annotations

import logging

from pydantic import ValidationError

from talentdesk.errors import StructuredOutputError
from talentdesk.llm.prompts import BIAS_AUDIT_PROMPT, BIAS_AUDIT_SYSTEM_PROMPT
from talentdesk.llm.response_schemas import BIAS_AUDIT_SCHEMA
from talentdesk.llm.router import LLMRouter
from talentdesk.types import AuditResult

logger = logging.getLogger(__name__)


def audit_job_description(router: LLMRouter, *, job_description: str, guidelines: str) -> AuditResult:
    system_prompt = BIAS_AUDIT_SYSTEM_PROMPT.format(guidelines=guidelines)
    user_query = BIAS_AUDIT_PROMPT.format(job_description=job_description)
    data = router.generate_structured(user_query, system_prompt, BIAS_AUDIT_SCHEMA)

    try:
        return AuditResult.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid bias audit payload: %s", exc)
        raise StructuredOutputError("Failed to perform bias audit due to an API or parsing error.") from exc


def apply_suggestion(job_description: str, biased_phrase: str, neutral_suggestion: str) -> str:
    if not biased_phrase:
        return job_description
    return job_description.replace(biased_phrase, neutral_suggestion)


def score_band(score: int | None) -> str:
    if not score:
        return "unknown"
    if score <= 3:
        return "low"
    if score <= 7:
        return "medium"
    return "high"
