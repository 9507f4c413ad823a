from __future__ import annotations

import json
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from talentdesk.db.models import PipelineEntry
from talentdesk.errors import StructuredOutputError
from talentdesk.llm.prompts import MATCH_PROMPT, MATCH_SYSTEM_PROMPT
from talentdesk.llm.response_schemas import CANDIDATE_MATCH_SCHEMA
from talentdesk.llm.router import LLMRouter
from talentdesk.types import CandidateMatchResult, RecommendedCandidate

logger = logging.getLogger(__name__)


def match_candidates(
    router: LLMRouter,
    *,
    job_description: str,
    candidates: Iterable[tuple[int, str]],
) -> CandidateMatchResult:
    candidates_for_prompt = [{"id": candidate_id, "profile": profile} for candidate_id, profile in candidates]
    user_query = MATCH_PROMPT.format(
        job_description=job_description,
        candidates_json=json.dumps(candidates_for_prompt, indent=2),
    )
    data = router.generate_structured(user_query, MATCH_SYSTEM_PROMPT, CANDIDATE_MATCH_SCHEMA, task="match")

    try:
        return CandidateMatchResult.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid candidate match payload: %s", exc)
        raise StructuredOutputError("An error occurred during AI matching.") from exc


def join_recommendations(
    result: CandidateMatchResult,
    entries: Iterable[tuple[str, PipelineEntry]],
) -> list[RecommendedCandidate]:
    """Attach scores to local profile entries, best match first.

    Recommendations naming an id that is not a local profile entry are dropped.
    """
    by_id = {entry.id: (pipeline_name, entry) for pipeline_name, entry in entries}

    matches: list[RecommendedCandidate] = []
    for recommendation in result.recommendations:
        found = by_id.get(recommendation.candidate_id)
        if found is None:
            logger.debug("Dropping recommendation for unknown candidate %s", recommendation.candidate_id)
            continue
        pipeline_name, entry = found
        if entry.type != "profile":
            continue
        matches.append(
            RecommendedCandidate(
                id=entry.id,
                candidate_name=entry.candidate_name,
                anonymized_result=entry.anonymized_result,
                fit_summary_result=entry.fit_summary_result,
                match_score=recommendation.match_score,
                justification=recommendation.justification,
                pipeline_name=pipeline_name,
            )
        )

    matches.sort(key=lambda item: item.match_score, reverse=True)
    return matches


def recommend_candidates(
    router: LLMRouter,
    *,
    job_description: str,
    entries: list[tuple[str, PipelineEntry]],
) -> list[RecommendedCandidate]:
    profiles = [(pipeline_name, entry) for pipeline_name, entry in entries if entry.type == "profile"]
    if not job_description.strip() or not profiles:
        return []

    result = match_candidates(
        router,
        job_description=job_description,
        candidates=[(entry.id, entry.anonymized_result) for _, entry in profiles],
    )
    return join_recommendations(result, profiles)


def restrict_to_candidates(result: CandidateMatchResult, candidate_ids: Iterable[int]) -> CandidateMatchResult:
    allowed = set(candidate_ids)
    kept = [item for item in result.recommendations if item.candidate_id in allowed]
    if len(kept) != len(result.recommendations):
        logger.info("Discarded %d recommendation(s) for unknown candidates", len(result.recommendations) - len(kept))
    return CandidateMatchResult(recommendations=kept)
