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


def test_health() -> None:
    response = _client().get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_unknown_route_returns_404_error_body() -> None:
    response = _client().get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_generate_field_without_api_key_returns_503() -> None:
    response = _client().post(
        "/api/company/generate-field",
        json={"field": "culture", "companyName": "Acme Corp"},
    )

    assert response.status_code == 503
    assert response.json() == {"error": "AI client not configured"}


def test_generate_field_returns_text(fake_provider_factory) -> None:
    provider = fake_provider_factory(text="At Acme Corp we grow together.")
    response = _client(provider).post(
        "/api/company/generate-field",
        json={"field": "culture", "companyName": "Acme Corp"},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "At Acme Corp we grow together."}
    assert "'Acme Corp'" in provider.calls[0]["user_query"]


def test_generate_field_rejects_unknown_field(fake_provider_factory) -> None:
    response = _client(fake_provider_factory()).post(
        "/api/company/generate-field",
        json={"field": "benefits", "companyName": "Acme Corp"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"
    assert "field" in response.json()["details"]["fieldErrors"]


def test_text_endpoint_validation_error_lists_fields() -> None:
    response = _client().post("/api/ai/text", json={"systemPrompt": "Be brief."})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert "userQuery" in body["details"]["fieldErrors"]


def test_text_endpoint_forwards_prompts(fake_provider_factory) -> None:
    provider = fake_provider_factory(text="pong")
    response = _client(provider).post(
        "/api/ai/text",
        json={"userQuery": "ping", "systemPrompt": "Answer tersely."},
    )

    assert response.status_code == 200
    assert response.json() == {"text": "pong"}
    assert provider.calls[0]["system_prompt"] == "Answer tersely."


def test_multimodal_endpoint_passes_files(fake_provider_factory) -> None:
    provider = fake_provider_factory(text="Resume summary")
    response = _client(provider).post(
        "/api/ai/multimodal",
        json={
            "userQuery": "Summarize",
            "systemPrompt": "You anonymize resumes.",
            "files": [{"base64": "aGVsbG8=", "mimeType": "application/pdf"}],
        },
    )

    assert response.status_code == 200
    assert response.json() == {"text": "Resume summary"}
    assert provider.calls[0]["files"][0].mime_type == "application/pdf"


def test_structured_endpoint_returns_parsed_json(fake_provider_factory) -> None:
    provider = fake_provider_factory(data={"score": 4, "label": "medium"})
    response = _client(provider).post(
        "/api/ai/structured",
        json={
            "userQuery": "rate",
            "systemPrompt": "rater",
            "responseSchema": {
                "type": "OBJECT",
                "properties": {"score": {"type": "INTEGER"}, "label": {"type": "STRING"}},
                "required": ["score", "label"],
            },
        },
    )

    assert response.status_code == 200
    assert response.json() == {"result": {"score": 4, "label": "medium"}}


def test_structured_endpoint_missing_required_field_is_upstream_failure(fake_provider_factory) -> None:
    provider = fake_provider_factory(data={"score": 4})
    response = _client(provider).post(
        "/api/ai/structured",
        json={
            "userQuery": "rate",
            "systemPrompt": "rater",
            "responseSchema": {"type": "OBJECT", "required": ["score", "label"]},
        },
    )

    assert response.status_code == 502
    assert "label" in response.json()["error"]


def test_upstream_failure_returns_generic_502(fake_provider_factory) -> None:
    def explode(system_prompt: str, user_query: str) -> str:
        raise RuntimeError("secret upstream detail")

    response = _client(fake_provider_factory(text=explode)).post(
        "/api/ai/text",
        json={"userQuery": "ping", "systemPrompt": "s"},
    )

    assert response.status_code == 502
    assert "secret upstream detail" not in response.json()["error"]


def test_compensation_endpoint(fake_provider_factory) -> None:
    provider = fake_provider_factory(text="$140k - $165k USD")
    response = _client(provider).post(
        "/api/compensation/calculate",
        json={
            "jobTitle": "Data Engineer",
            "experience": "Senior",
            "location": "Austin, TX",
            "industry": "Fintech",
            "companyName": "Acme Corp",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"text": "$140k - $165k USD"}
    assert "Acme Corp" in provider.calls[0]["system_prompt"]
    assert "Senior Data Engineer role in Austin, TX" in provider.calls[0]["user_query"]


def test_match_endpoint_discards_unknown_candidate_ids(fake_provider_factory) -> None:
    provider = fake_provider_factory(
        data={
            "recommendations": [
                {"candidateId": 1, "matchScore": 91, "justification": "Strong Python background."},
                {"candidateId": 42, "matchScore": 80, "justification": "Not in the input."},
            ]
        }
    )
    response = _client(provider).post(
        "/api/candidates/match",
        json={
            "jobDescription": "Senior Python engineer",
            "candidates": [
                {"id": 1, "anonymizedResult": "8 years Python"},
                {"id": 2, "anonymizedResult": "3 years Go"},
            ],
        },
    )

    assert response.status_code == 200
    recommendations = response.json()["result"]["recommendations"]
    assert recommendations == [{"candidateId": 1, "matchScore": 91, "justification": "Strong Python background."}]
    assert provider.calls[0]["model"] == "gemini-2.5-pro"


def test_match_endpoint_requires_candidates() -> None:
    response = _client().post("/api/candidates/match", json={"jobDescription": "JD", "candidates": []})

    assert response.status_code == 400
    assert "candidates" in response.json()["details"]["fieldErrors"]


def test_unhandled_error_returns_500() -> None:
    app = create_app()

    @app.get("/api/boom")
    def boom() -> None:
        raise RuntimeError("unexpected")

    response = TestClient(app, raise_server_exceptions=False).get("/api/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
