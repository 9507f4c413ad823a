from __future__ import annotations

from fastapi.testclient import TestClient

from talentdesk.api.app import create_app
from talentdesk.api.deps import get_llm_router
from talentdesk.config import Settings
from talentdesk.llm.router import LLMRouter


def _client(provider=None) -> TestClient:
    app = create_app()
    if provider is not None:
        router = LLMRouter(settings=Settings(api_key="", search_enabled=False), provider=provider)
        app.dependency_overrides[get_llm_router] = lambda: router
    return TestClient(app)


def test_dashboard_renders_company_profile_and_icon_link() -> None:
    client = _client()

    response = client.get("/")
    assert response.status_code == 200
    assert "Acme Corp" in response.text
    assert 'rel="icon"' in response.text
    assert client.get("/favicon.ico").status_code in {200, 204}


def test_every_tool_page_renders() -> None:
    client = _client()

    for path in ("/anonymizer", "/pipelines", "/broadcaster", "/audit", "/compensation", "/interviews", "/feedback"):
        response = client.get(path)
        assert response.status_code == 200, path
        assert 'id="status-banner"' in response.text


def test_pipeline_errors_show_on_status_banner() -> None:
    client = _client()

    created = client.post("/web/pipelines", data={"name": "Frontend"})
    assert created.status_code == 200
    assert "Frontend" in created.text
    assert "created." in created.text

    duplicate = client.post("/web/pipelines", data={"name": "Frontend"})
    assert "A pipeline with this name already exists." in duplicate.text


def test_anonymize_then_save_profile_to_pipeline(fake_provider_factory) -> None:
    def reply(system_prompt: str, user_query: str) -> str:
        if "fit summary" in user_query:
            return "Strong fit for a collaborative team."
        return "Frontend engineer with 5 years of React."

    client = _client(fake_provider_factory(text=reply))
    client.post("/web/pipelines", data={"name": "Frontend"})

    generated = client.post(
        "/web/anonymizer",
        data={"raw_text": "Jane Doe, jane@example.com, 5 years React"},
    )
    assert generated.status_code == 200
    assert "Frontend engineer with 5 years of React." in generated.text
    assert "Unbiased profile generated." in generated.text

    saved = client.post(
        "/web/pipelines/save-profile",
        data={
            "pipeline_name": "Frontend",
            "candidate_name": "Candidate 1",
            "anonymized_result": "Frontend engineer with 5 years of React.",
            "fit_summary_result": "Strong fit for a collaborative team.",
        },
    )
    assert saved.status_code == 200
    assert "Candidate 1" in saved.text

    pipelines = client.get("/api/pipelines").json()
    assert pipelines[0]["entries"][0]["candidateName"] == "Candidate 1"


def test_save_without_pipeline_reports_error(fake_provider_factory) -> None:
    client = _client(fake_provider_factory())

    response = client.post(
        "/web/pipelines/save-profile",
        data={"pipeline_name": "", "candidate_name": "X", "anonymized_result": "a", "fit_summary_result": "b"},
    )

    assert "Please select a pipeline to save to." in response.text


def test_tool_page_without_api_key_shows_configuration_error() -> None:
    client = _client()

    response = client.post(
        "/web/compensation",
        data={"job_title": "Designer", "experience": "Junior", "location": "Berlin", "industry": "Retail"},
    )

    assert response.status_code == 200
    assert "AI client not configured" in response.text
