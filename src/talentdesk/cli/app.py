from __future__ import annotations

import json
from pathlib import Path

import typer
import uvicorn

from talentdesk.api.app import create_app
from talentdesk.config import get_settings
from talentdesk.core.bias_audit import audit_job_description, score_band
from talentdesk.core.company import generate_company_field
from talentdesk.core.compensation import calculate_compensation
from talentdesk.core.interviews import generate_interview_questions
from talentdesk.db.init import init_database
from talentdesk.db.repositories import Repository
from talentdesk.db.session import session_scope
from talentdesk.errors import TalentDeskError
from talentdesk.llm.router import LLMRouter
from talentdesk.logging_config import configure_logging

app = typer.Typer(help="TalentDesk CLI")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _emit(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _fail(exc: TalentDeskError) -> None:
    typer.echo(json.dumps({"error": exc.message}), err=True)
    raise typer.Exit(code=1)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
) -> None:
    """Run the HTTP server and web UI."""
    configure_logging()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(app_instance, host=host or settings.host, port=port or settings.port)


@app.command("generate-field")
def generate_field_cmd(
    field: str = typer.Option(..., "--field", help="culture, orgStructure or guidelines"),
    company_name: str = typer.Option(..., "--company-name"),
) -> None:
    configure_logging()
    try:
        text = generate_company_field(LLMRouter(), field=field, company_name=company_name)
    except TalentDeskError as exc:
        _fail(exc)
    _emit({"field": field, "text": text})


@app.command("compensation")
def compensation_cmd(
    job_title: str = typer.Option(..., "--job-title"),
    experience: str = typer.Option(..., "--experience"),
    location: str = typer.Option(..., "--location"),
    industry: str = typer.Option(..., "--industry"),
    company_name: str = typer.Option(..., "--company-name"),
) -> None:
    configure_logging()
    try:
        text = calculate_compensation(
            LLMRouter(),
            job_title=job_title,
            experience=experience,
            location=location,
            industry=industry,
            company_name=company_name,
        )
    except TalentDeskError as exc:
        _fail(exc)
    _emit({"text": text})


@app.command("audit")
def audit_cmd(file: Path = typer.Option(..., "--file", exists=True, readable=True)) -> None:
    """Audit a job description file for biased language."""
    configure_logging()
    ensure_initialized()
    job_description = file.read_text(encoding="utf-8")

    with session_scope() as db:
        guidelines = Repository(db).company_profile_data().guidelines
    try:
        result = audit_job_description(LLMRouter(), job_description=job_description, guidelines=guidelines)
    except TalentDeskError as exc:
        _fail(exc)
    _emit({**result.model_dump(by_alias=True), "band": score_band(result.bias_score)})


@app.command("questions")
def questions_cmd(
    job_title: str = typer.Option(..., "--job-title"),
    key_skills: str = typer.Option(..., "--key-skills"),
    experience: str = typer.Option(..., "--experience"),
    technical: int = typer.Option(4, "--technical", min=1, max=10),
    behavioral: int = typer.Option(4, "--behavioral", min=1, max=10),
    culture: int = typer.Option(4, "--culture", min=1, max=10),
) -> None:
    configure_logging()
    ensure_initialized()

    with session_scope() as db:
        company = Repository(db).company_profile_data()
    try:
        text = generate_interview_questions(
            LLMRouter(),
            company,
            job_title=job_title,
            key_skills=key_skills,
            experience=experience,
            technical_count=technical,
            behavioral_count=behavioral,
            culture_count=culture,
        )
    except TalentDeskError as exc:
        _fail(exc)
    _emit({"text": text})
