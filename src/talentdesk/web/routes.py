from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Request, UploadFile
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from talentdesk.api.deps import get_llm_router, get_repository, get_scheduler
from talentdesk.core.anonymizer import (
    candidate_name_from_filename,
    encode_upload,
    generate_unbiased_profile,
)
from talentdesk.core.bias_audit import apply_suggestion, audit_job_description, score_band
from talentdesk.core.company import generate_company_field
from talentdesk.core.compensation import calculate_compensation
from talentdesk.core.feedback import FEEDBACK_EXAMPLES, generate_example_feedback, generate_feedback
from talentdesk.core.interviews import generate_interview_questions
from talentdesk.core.scheduler import MatchScheduler
from talentdesk.db.repositories import Repository
from talentdesk.errors import TalentDeskError
from talentdesk.llm.router import LLMRouter
from talentdesk.types import FeedbackEntryDraft, FileMetadata, ProfileEntryDraft

router = APIRouter(tags=["web"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
static_dir = Path(__file__).resolve().parent / "static"

COMPANY_FIELD_FORM_NAMES = {
    "culture": "culture",
    "orgStructure": "org_structure",
    "guidelines": "guidelines",
}


def _page(
    request: Request,
    template: str,
    repo: Repository,
    context: dict | None = None,
    *,
    status: str = "",
    status_code: int = 200,
) -> HTMLResponse:
    values = {
        "company": repo.company_profile_data(),
        "pipeline_names": repo.pipeline_names(),
        "status": status or request.query_params.get("status", ""),
    }
    values.update(context or {})
    return templates.TemplateResponse(request, template, values, status_code=status_code)


def _redirect(url: str, status: str) -> RedirectResponse:
    return RedirectResponse(url=f"{url}?status={quote(status)}", status_code=303)


@router.get("/favicon.ico", include_in_schema=False)
def favicon() -> Response:
    icon_path = static_dir / "favicon.svg"
    if icon_path.is_file():
        return FileResponse(icon_path, media_type="image/svg+xml")
    return Response(status_code=204)


@router.get("/", response_class=HTMLResponse)
def dashboard(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "dashboard.html", repo)


@router.post("/web/company")
def update_company(
    name: str = Form(...),
    culture: str = Form(""),
    org_structure: str = Form(""),
    guidelines: str = Form(""),
    repo: Repository = Depends(get_repository),
):
    try:
        repo.update_company_profile(
            {"name": name, "culture": culture, "org_structure": org_structure, "guidelines": guidelines}
        )
    except TalentDeskError as exc:
        return _redirect("/", exc.message)
    return _redirect("/", "Company profile saved.")


@router.post("/web/company/generate/{field}", response_class=HTMLResponse)
def generate_field(
    field: str,
    request: Request,
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> HTMLResponse:
    company = repo.company_profile_data()
    try:
        text = generate_company_field(llm, field=field, company_name=company.name)
    except TalentDeskError as exc:
        return _page(request, "dashboard.html", repo, status=exc.message)

    repo.update_company_profile({COMPANY_FIELD_FORM_NAMES[field]: text})
    return _page(request, "dashboard.html", repo, status=f"Generated {field} for {company.name}.")


@router.post("/web/company/files")
async def upload_company_files(
    files: list[UploadFile] = File(...),
    repo: Repository = Depends(get_repository),
):
    metadata = [
        FileMetadata(name=item.filename or "document", size=item.size or 0, mime_type=item.content_type or "")
        for item in files
        if item.filename
    ]
    if not metadata:
        return _redirect("/", "No files selected.")
    try:
        result = repo.add_company_files(metadata)
    except TalentDeskError as exc:
        return _redirect("/", exc.message)
    return _redirect("/", " ".join(result.messages))


@router.post("/web/company/files/{file_name}/delete")
def remove_company_file(file_name: str, repo: Repository = Depends(get_repository)):
    try:
        repo.remove_company_file(file_name)
    except TalentDeskError as exc:
        return _redirect("/", exc.message)
    return _redirect("/", f"Removed {file_name}.")


@router.get("/anonymizer", response_class=HTMLResponse)
def anonymizer_page(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "anonymizer.html", repo)


@router.post("/web/anonymizer", response_class=HTMLResponse)
async def anonymize(
    request: Request,
    raw_text: str = Form(""),
    files: list[UploadFile] = File(default=[]),
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> HTMLResponse:
    max_bytes = repo.settings.max_upload_bytes
    context: dict = {"raw_text": raw_text}
    try:
        inline_files = [
            encode_upload(
                name=item.filename or "upload",
                content=await item.read(),
                mime_type=item.content_type or "application/octet-stream",
                max_bytes=max_bytes,
            )
            for item in files
            if item.filename
        ]
        profile = generate_unbiased_profile(
            llm,
            repo.company_profile_data(),
            raw_text=raw_text,
            files=inline_files,
            max_bytes=max_bytes,
        )
    except TalentDeskError as exc:
        return _page(request, "anonymizer.html", repo, context, status=exc.message)

    named = next((item.name for item in inline_files if item.name), "")
    context.update(
        {
            "anonymized_result": profile.anonymized_result,
            "fit_summary_result": profile.fit_summary_result,
            "suggested_name": candidate_name_from_filename(named) if named else "",
        }
    )
    return _page(request, "anonymizer.html", repo, context, status="Unbiased profile generated.")


@router.get("/pipelines", response_class=HTMLResponse)
def pipelines_page(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "pipelines.html", repo, {"pipelines": repo.snapshot()})


@router.post("/web/pipelines")
def create_pipeline(name: str = Form(""), repo: Repository = Depends(get_repository)):
    try:
        pipeline = repo.create_pipeline(name)
    except TalentDeskError as exc:
        return _redirect("/pipelines", exc.message)
    return _redirect("/pipelines", f'Pipeline "{pipeline.name}" created.')


@router.post("/web/pipelines/{name}/delete")
def delete_pipeline(
    name: str,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
):
    try:
        repo.delete_pipeline(name)
    except TalentDeskError as exc:
        return _redirect("/pipelines", exc.message)
    background_tasks.add_task(scheduler.refresh)
    return _redirect("/pipelines", f'Pipeline "{name}" deleted.')


@router.post("/web/pipelines/save-profile")
def save_profile(
    background_tasks: BackgroundTasks,
    pipeline_name: str = Form(""),
    candidate_name: str = Form(""),
    anonymized_result: str = Form(""),
    fit_summary_result: str = Form(""),
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
):
    draft = ProfileEntryDraft(
        candidate_name=candidate_name,
        anonymized_result=anonymized_result,
        fit_summary_result=fit_summary_result,
    )
    try:
        repo.append_entry(pipeline_name, draft)
    except TalentDeskError as exc:
        return _redirect("/anonymizer", exc.message)
    background_tasks.add_task(scheduler.refresh)
    return _redirect("/pipelines", f'Saved {draft.candidate_name.strip()} to "{pipeline_name}".')


@router.post("/web/pipelines/save-feedback")
def save_feedback(
    background_tasks: BackgroundTasks,
    pipeline_name: str = Form(""),
    candidate_name: str = Form(""),
    job_title: str = Form(""),
    application_status: str = Form("REJECTED"),
    feedback_message: str = Form(""),
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
):
    draft = FeedbackEntryDraft(
        candidate_name=candidate_name,
        job_title=job_title,
        application_status="HIRED" if application_status == "HIRED" else "REJECTED",
        feedback_message=feedback_message,
    )
    try:
        repo.append_entry(pipeline_name, draft)
    except TalentDeskError as exc:
        return _redirect("/feedback", exc.message)
    background_tasks.add_task(scheduler.refresh)
    return _redirect("/pipelines", f'Saved feedback for {draft.candidate_name.strip()} to "{pipeline_name}".')


@router.post("/web/pipelines/{name}/entries/{entry_id}/rename")
def rename_entry(
    name: str,
    entry_id: int,
    background_tasks: BackgroundTasks,
    candidate_name: str = Form(""),
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
):
    try:
        repo.rename_entry(name, entry_id, candidate_name)
    except TalentDeskError as exc:
        return _redirect("/pipelines", exc.message)
    background_tasks.add_task(scheduler.refresh)
    return _redirect("/pipelines", "Candidate renamed.")


@router.post("/web/pipelines/{name}/entries/{entry_id}/delete")
def delete_entry(
    name: str,
    entry_id: int,
    background_tasks: BackgroundTasks,
    repo: Repository = Depends(get_repository),
    scheduler: MatchScheduler = Depends(get_scheduler),
):
    try:
        repo.delete_entry(name, entry_id)
    except TalentDeskError as exc:
        return _redirect("/pipelines", exc.message)
    background_tasks.add_task(scheduler.refresh)
    return _redirect("/pipelines", "Entry removed.")


@router.get("/broadcaster", response_class=HTMLResponse)
def broadcaster_page(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "broadcaster.html", repo)


@router.get("/audit", response_class=HTMLResponse)
def audit_page(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "audit.html", repo, {"job_description": ""})


@router.post("/web/audit", response_class=HTMLResponse)
def run_audit(
    request: Request,
    job_description: str = Form(""),
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> HTMLResponse:
    context: dict = {"job_description": job_description}
    if not job_description.strip():
        return _page(request, "audit.html", repo, context, status="Paste a job description to audit.")
    try:
        result = audit_job_description(
            llm,
            job_description=job_description,
            guidelines=repo.company_profile_data().guidelines,
        )
    except TalentDeskError as exc:
        return _page(request, "audit.html", repo, context, status=exc.message)

    context.update({"result": result, "band": score_band(result.bias_score)})
    return _page(request, "audit.html", repo, context, status="Audit complete.")


@router.post("/web/audit/apply", response_class=HTMLResponse)
def apply_audit_suggestion(
    request: Request,
    job_description: str = Form(""),
    biased_phrase: str = Form(""),
    neutral_suggestion: str = Form(""),
    repo: Repository = Depends(get_repository),
) -> HTMLResponse:
    updated = apply_suggestion(job_description, biased_phrase, neutral_suggestion)
    return _page(
        request,
        "audit.html",
        repo,
        {"job_description": updated},
        status=f'Replaced "{biased_phrase}".',
    )


@router.get("/compensation", response_class=HTMLResponse)
def compensation_page(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "compensation.html", repo, {"form": {}})


@router.post("/web/compensation", response_class=HTMLResponse)
def run_compensation(
    request: Request,
    job_title: str = Form(""),
    experience: str = Form(""),
    location: str = Form(""),
    industry: str = Form(""),
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> HTMLResponse:
    form = {"job_title": job_title, "experience": experience, "location": location, "industry": industry}
    if not all(value.strip() for value in form.values()):
        return _page(request, "compensation.html", repo, {"form": form}, status="Please fill in all fields.")
    try:
        text = calculate_compensation(llm, company_name=repo.company_profile_data().name, **form)
    except TalentDeskError as exc:
        return _page(request, "compensation.html", repo, {"form": form}, status=exc.message)
    return _page(request, "compensation.html", repo, {"form": form, "result": text}, status="Estimate ready.")


@router.get("/interviews", response_class=HTMLResponse)
def interviews_page(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "interviews.html", repo, {"form": {}})


@router.post("/web/interviews", response_class=HTMLResponse)
def run_interviews(
    request: Request,
    job_title: str = Form(""),
    key_skills: str = Form(""),
    experience: str = Form(""),
    technical_count: int = Form(4),
    behavioral_count: int = Form(4),
    culture_count: int = Form(4),
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> HTMLResponse:
    form = {"job_title": job_title, "key_skills": key_skills, "experience": experience}
    if not all(value.strip() for value in form.values()):
        return _page(request, "interviews.html", repo, {"form": form}, status="Please fill in all fields.")
    try:
        text = generate_interview_questions(
            llm,
            repo.company_profile_data(),
            technical_count=technical_count,
            behavioral_count=behavioral_count,
            culture_count=culture_count,
            **form,
        )
    except TalentDeskError as exc:
        return _page(request, "interviews.html", repo, {"form": form}, status=exc.message)
    return _page(request, "interviews.html", repo, {"form": form, "result": text}, status="Questions generated.")


@router.get("/feedback", response_class=HTMLResponse)
def feedback_page(request: Request, repo: Repository = Depends(get_repository)) -> HTMLResponse:
    return _page(request, "feedback.html", repo, {"form": {}, "examples": FEEDBACK_EXAMPLES})


@router.post("/web/feedback", response_class=HTMLResponse)
def run_feedback(
    request: Request,
    candidate_name: str = Form(""),
    job_title: str = Form(""),
    job_description: str = Form(""),
    notes: str = Form(""),
    status: str = Form("REJECTED"),
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> HTMLResponse:
    company = repo.company_profile_data()
    form = {
        "candidate_name": candidate_name,
        "job_title": job_title,
        "job_description": job_description,
        "notes": notes,
        "status": "HIRED" if status == "HIRED" else "REJECTED",
    }
    context: dict = {"form": form, "examples": FEEDBACK_EXAMPLES}
    if not (candidate_name.strip() and job_title.strip() and notes.strip()):
        return _page(request, "feedback.html", repo, context, status="Please fill in all fields.")
    try:
        text = generate_feedback(llm, company, company_name=company.name, **form)
    except TalentDeskError as exc:
        return _page(request, "feedback.html", repo, context, status=exc.message)
    context["result"] = text
    return _page(request, "feedback.html", repo, context, status="Feedback drafted.")


@router.post("/web/feedback/examples/{key}", response_class=HTMLResponse)
def run_feedback_example(
    key: str,
    request: Request,
    repo: Repository = Depends(get_repository),
    llm: LLMRouter = Depends(get_llm_router),
) -> HTMLResponse:
    context: dict = {"form": {}, "examples": FEEDBACK_EXAMPLES}
    try:
        example, text = generate_example_feedback(llm, repo.company_profile_data(), key)
    except TalentDeskError as exc:
        return _page(request, "feedback.html", repo, context, status=exc.message)

    context["form"] = {
        "candidate_name": example.name,
        "job_title": example.job,
        "job_description": example.jd,
        "notes": example.notes,
        "status": example.status,
    }
    context["result"] = text
    return _page(request, "feedback.html", repo, context, status=f"Example loaded: {example.name}.")
