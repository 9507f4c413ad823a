from __future__ import annotations

import os

os.environ["APP_ENV"] = "test"
os.environ["API_KEY"] = ""
os.environ["SEARCH_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"

import json
from collections.abc import Callable
from typing import Any

import pytest

from talentdesk.core import runtime
from talentdesk.db.base import Base
from talentdesk.db.seed import seed_company_profile
from talentdesk.db.session import SessionLocal, engine
from talentdesk.llm.providers import ProviderConfig
from talentdesk.types import InlineFile, ModelResponse


class FakeProvider:
    """Stands in for the model: records every call and replies from callables."""

    def __init__(
        self,
        *,
        text: str | Callable[[str, str], str] = "generated text",
        data: Any = None,
    ):
        self.config = ProviderConfig(name="fake", base_url="http://fake.local", api_key="fake", timeout_sec=1)
        self.text = text
        self.data = data
        self.calls: list[dict[str, Any]] = []

    def complete_text(
        self,
        *,
        model: str,
        system_prompt: str,
        user_query: str,
        files: list[InlineFile] | None = None,
    ) -> ModelResponse:
        self.calls.append(
            {"kind": "text", "model": model, "system_prompt": system_prompt, "user_query": user_query, "files": files}
        )
        content = self.text(system_prompt, user_query) if callable(self.text) else self.text
        return ModelResponse(content=content, raw={"provider": "fake"})

    def complete_json(self, *, model: str, system_prompt: str, user_query: str, schema: dict[str, Any]) -> Any:
        self.calls.append(
            {"kind": "json", "model": model, "system_prompt": system_prompt, "user_query": user_query, "schema": schema}
        )
        data = self.data(user_query) if callable(self.data) else self.data
        return json.loads(json.dumps(data)) if data is not None else None


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed_company_profile(session)
    yield


@pytest.fixture(autouse=True)
def reset_runtime(monkeypatch) -> None:
    monkeypatch.setattr(runtime, "_EVENT_BUS", None)
    monkeypatch.setattr(runtime, "_MATCH_SCHEDULER", None)


@pytest.fixture
def fake_provider_factory() -> Callable[..., FakeProvider]:
    return FakeProvider
