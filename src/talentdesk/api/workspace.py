from __future__ import annotations

import asyncio
from typing import Union

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Response, WebSocket, WebSocketDisconnect

from talentdesk.api.deps import get_llm_router, get_repository, get_scheduler
from talentdesk.api.schemas import (
    AnonymizeRequest,
    AnonymizeResponse,
    ApplySuggestionRequest,
    AuditRequest,
    AuditResponse,
    BroadcastRequest,
    CompanyProfileUpdate,
    EntryCreateRequest,
    EntryRenameRequest,
    FeedbackExampleResponse,
    FeedbackRequest,
    FileAddRequest,
    FileAddResponse,
    InterviewRequest,
    JobDescriptionResponse,
    PipelineCreateRequest,
    ReorderRequest,
    TextResponse,
)
from talentdesk.core.anonymizer import candidate_name_from_filename, generate_unbiased_profile
from talentdesk.core.bias_audit import apply_suggestion, audit_job_description, score_band
from talentdesk.core.feedback import generate_example_feedback, generate_feedback
from talentdesk.core.interviews import generate_interview_questions
from talentdesk.core.runtime import get_event_bus
from talentdesk.core.scheduler import BROADCAST_CHANNEL, BroadcastState, MatchScheduler
from talentdesk.db.repositories import Repository, entry_from_row
from talentdesk.llm.router import LLMRouter
from talentdesk.types import CompanyProfileData, FeedbackEntry, Pipeline, ProfileEntry

router = APIRouter(prefix="/api", tags=["workspace"])


def _pipeline_view(repo: Repository, name: str) -> Pipeline:
    return Pipeline(name=name, entries=[entry_from_row(row) for row in repo.pipeline_entries(name)])


@router.get("/company", response_model=CompanyProfileData)
def get_company(repo: Repository = Depends(get_repository)) -> CompanyProfileData:
    return repo.company_profile_data()


@router.put("/company", response_model=CompanyProfileData)
def update_company(payload: CompanyProfileUpdate, repo: Repository = Depends(get_repository)) -> CompanyProfileData:
    return repo.update_company_profile(payload.model_dump())


@router.post("/company/files", response_model=FileAddResponse)
def add_company_files(payload: FileAddRequest, repo: Repository = Depends(get_repository)) -> FileAddResponse:
    result = repo.add_company_files(payload.files)
    return FileAddResponse(profile=repo.company_profile_data(), messages=result.messages)


@router.delete("/company/files/{file_name}", response_model=CompanyProfileData)
def remove_company_file(file_name: str, repo: Repository = Depends(get_repository)) -> CompanyProfileData:
    repo.remove_company_file(file_name)
    return repo.company_profile_data()


@router.get("/pipelines", response_model=list[Pipeline])
def list_pipelines(repo: Repository = Depends(get_repository)) -> list[Pipeline]:
    return repo.snapshot()


@router.post("/pipelines", response_model=Pipeline, status_code=201)
def create_pipeline(payload: PipelineCreateRequest, repo: Repository = Depends(get_repository)) -> Pipeline:
    pipeline = repo.create_pipeline(payload.name)
    return Pipeline(name=pipeline.name, entries=[])


@router.get("/pipelines/{name}", response_model=Pipeline)
def get_pipeline(name: str, repo: Repository = Depends(get_repository)) -> Pipeline:
    return _pipeline_view(repo, name)


@router.delete("/pipelines/{name}", status_code=204)
def delete_pipeline(
    name: str,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
) -> Response:
    repo.delete_pipeline(name)
    background_tasks.add_task(scheduler.refresh)
    return Response(status_code=204)


@router.post("/pipelines/{name}/entries", response_model=Union[ProfileEntry, FeedbackEntry], status_code=201)
def append_entry(
    name: str,
    payload: EntryCreateRequest,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
) -> ProfileEntry | FeedbackEntry:
    row = repo.append_entry(name, payload.root)
    background_tasks.add_task(scheduler.refresh)
    return entry_from_row(row)


@router.patch("/pipelines/{name}/entries/{entry_id}", response_model=Union[ProfileEntry, FeedbackEntry])
def rename_entry(
    name: str,
    entry_id: int,
    payload: EntryRenameRequest,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
) -> ProfileEntry | FeedbackEntry:
    row = repo.rename_entry(name, entry_id, payload.candidate_name)
    background_tasks.add_task(scheduler.refresh)
    return entry_from_row(row)


@router.delete("/pipelines/{name}/entries/{entry_id}", response_model=Pipeline)
def delete_entry(
    name: str,
    entry_id: int,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
) -> Pipeline:
    repo.delete_entry(name, entry_id)
    background_tasks.add_task(scheduler.refresh)
    return _pipeline_view(repo, name)


@router.post("/pipelines/{name}/reorder", response_model=Pipeline)
def reorder_entries(
    name: str,
    payload: ReorderRequest,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
) -> Pipeline:
    repo.move_entry(name, payload.from_index, payload.to_index)
    background_tasks.add_task(scheduler.refresh)
    return _pipeline_view(repo, name)


@router.post("/jd/audit", response_model=AuditResponse)
def audit(
    payload: AuditRequest,
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> AuditResponse:
    guidelines = repo.company_profile_data().guidelines
    result = audit_job_description(llm, job_description=payload.job_description, guidelines=guidelines)
    return AuditResponse(**result.model_dump(), band=score_band(result.bias_score))


@router.post("/jd/apply-suggestion", response_model=JobDescriptionResponse)
def apply_audit_suggestion(payload: ApplySuggestionRequest) -> JobDescriptionResponse:
    return JobDescriptionResponse(
        job_description=apply_suggestion(payload.job_description, payload.biased_phrase, payload.neutral_suggestion)
    )


@router.post("/interviews/questions", response_model=TextResponse)
def interview_questions(
    payload: InterviewRequest,
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> TextResponse:
    text = generate_interview_questions(
        llm,
        repo.company_profile_data(),
        job_title=payload.job_title,
        key_skills=payload.key_skills,
        experience=payload.experience,
        technical_count=payload.technical_count,
        behavioral_count=payload.behavioral_count,
        culture_count=payload.culture_count,
    )
    return TextResponse(text=text)


@router.post("/feedback/generate", response_model=TextResponse)
def feedback_generate(
    payload: FeedbackRequest,
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> TextResponse:
    company = repo.company_profile_data()
    text = generate_feedback(
        llm,
        company,
        candidate_name=payload.candidate_name,
        job_title=payload.job_title,
        company_name=payload.company_name or company.name,
        job_description=payload.job_description,
        notes=payload.notes,
        status=payload.status,
    )
    return TextResponse(text=text)


@router.post("/feedback/examples/{key}", response_model=FeedbackExampleResponse)
def feedback_example(
    key: str,
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> FeedbackExampleResponse:
    example, text = generate_example_feedback(llm, repo.company_profile_data(), key)
    return FeedbackExampleResponse(
        candidate_name=example.name,
        job_title=example.job,
        company_name=example.company,
        job_description=example.jd,
        notes=example.notes,
        status=example.status,
        text=text,
    )


@router.post("/profiles/anonymize", response_model=AnonymizeResponse)
def anonymize_profile(
    payload: AnonymizeRequest,
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> AnonymizeResponse:
    profile = generate_unbiased_profile(
        llm,
        repo.company_profile_data(),
        raw_text=payload.raw_text,
        files=payload.files,
        max_bytes=repo.settings.max_upload_bytes,
    )
    named = next((item.name for item in payload.files if item.name), "")
    return AnonymizeResponse(
        anonymized_result=profile.anonymized_result,
        fit_summary_result=profile.fit_summary_result,
        suggested_name=candidate_name_from_filename(named) if named else "",
    )


@router.get("/broadcast", response_model=BroadcastState)
async def get_broadcast(scheduler: MatchScheduler = Depends(get_scheduler)) -> BroadcastState:
    return scheduler.snapshot()


@router.put("/broadcast", response_model=BroadcastState)
async def update_broadcast(
    payload: BroadcastRequest,
    debounce: bool = Query(True),
    scheduler: MatchScheduler = Depends(get_scheduler),
) -> BroadcastState:
    if debounce:
        return await scheduler.update(payload.job_description)
    return await scheduler.run_now(payload.job_description)


@router.websocket("/broadcast/stream")
async def stream_broadcast(websocket: WebSocket, scheduler: MatchScheduler = Depends(get_scheduler)) -> None:
    await websocket.accept()
    event_bus = scheduler.event_bus or get_event_bus()
    initial = scheduler.snapshot().model_dump(mode="json", by_alias=True)

    async def forward() -> None:
        async for event in event_bus.subscribe(BROADCAST_CHANNEL, initial=initial):
            await websocket.send_json(event)

    async def watch_disconnect() -> None:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return

    tasks = [asyncio.create_task(forward()), asyncio.create_task(watch_disconnect())]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    for task in done:
        exc = task.exception()
        if exc is not None and not isinstance(exc, WebSocketDisconnect):
            raise exc
