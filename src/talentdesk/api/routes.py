from __future__ import annotations

from fastapi import APIRouter, Depends

from talentdesk.api.deps import get_llm_router
from talentdesk.api.schemas import (
    CompensationRequest,
    GenerateFieldRequest,
    MatchRequest,
    MatchResponse,
    MultimodalRequest,
    StructuredRequest,
    StructuredResponse,
    TextRequest,
    TextResponse,
)
from talentdesk.core.company import generate_company_field
from talentdesk.core.compensation import calculate_compensation
from talentdesk.core.matching import match_candidates, restrict_to_candidates
from talentdesk.llm.router import LLMRouter

router = APIRouter(prefix="/api", tags=["api"])


@router.post("/ai/text", response_model=TextResponse)
def generate_text(payload: TextRequest, llm: LLMRouter = Depends(get_llm_router)) -> TextResponse:
    text = llm.generate_text(payload.user_query, payload.system_prompt, payload.use_search)
    return TextResponse(text=text)


@router.post("/ai/multimodal", response_model=TextResponse)
def generate_multimodal(payload: MultimodalRequest, llm: LLMRouter = Depends(get_llm_router)) -> TextResponse:
    text = llm.generate_multimodal(payload.user_query, payload.system_prompt, payload.files)
    return TextResponse(text=text)


@router.post("/ai/structured", response_model=StructuredResponse)
def generate_structured(payload: StructuredRequest, llm: LLMRouter = Depends(get_llm_router)) -> StructuredResponse:
    result = llm.generate_structured(payload.user_query, payload.system_prompt, payload.response_schema)
    return StructuredResponse(result=result)


@router.post("/company/generate-field", response_model=TextResponse)
def company_generate_field(
    payload: GenerateFieldRequest,
    llm: LLMRouter = Depends(get_llm_router),
) -> TextResponse:
    text = generate_company_field(llm, field=payload.field, company_name=payload.company_name)
    return TextResponse(text=text)


@router.post("/compensation/calculate", response_model=TextResponse)
def compensation_calculate(
    payload: CompensationRequest,
    llm: LLMRouter = Depends(get_llm_router),
) -> TextResponse:
    text = calculate_compensation(
        llm,
        job_title=payload.job_title,
        experience=payload.experience,
        location=payload.location,
        industry=payload.industry,
        company_name=payload.company_name,
    )
    return TextResponse(text=text)


@router.post("/candidates/match", response_model=MatchResponse)
def candidates_match(payload: MatchRequest, llm: LLMRouter = Depends(get_llm_router)) -> MatchResponse:
    result = match_candidates(
        llm,
        job_description=payload.job_description,
        candidates=[(item.id, item.anonymized_result) for item in payload.candidates],
    )
    return MatchResponse(result=restrict_to_candidates(result, (item.id for item in payload.candidates)))
