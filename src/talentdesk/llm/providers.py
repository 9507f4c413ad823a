from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from openai import OpenAI

from talentdesk.config import Settings
from talentdesk.llm.response_schemas import normalize_schema
from talentdesk.types import InlineFile, ModelResponse

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProviderConfig:
    name: str
    base_url: str
    api_key: str
    timeout_sec: int


class LLMProvider:
    def __init__(self, config: ProviderConfig):
        self.config = config
        self.client = OpenAI(
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=float(config.timeout_sec),
        )

    def complete_text(
        self,
        *,
        model: str,
        system_prompt: str,
        user_query: str,
        files: list[InlineFile] | None = None,
    ) -> ModelResponse:
        response = self.client.chat.completions.create(
            model=model,
            messages=build_messages(system_prompt, user_query, files or []),
        )
        return self._to_model_response(response)

    def complete_json(
        self,
        *,
        model: str,
        system_prompt: str,
        user_query: str,
        schema: dict[str, Any],
    ) -> Any:
        response = self.client.chat.completions.create(
            model=model,
            messages=build_messages(system_prompt, user_query, []),
            response_format=response_format_for(schema),
        )
        return parse_json(self._to_model_response(response).content)

    def _to_model_response(self, response: Any) -> ModelResponse:
        text = self._extract_chat_text(response)
        raw = response.model_dump() if hasattr(response, "model_dump") else {}
        if not isinstance(raw, dict):
            raw = {"raw": raw}
        raw["provider"] = self.config.name
        return ModelResponse(content=text, raw=raw)

    @staticmethod
    def _extract_chat_text(response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""

        message = getattr(choices[0], "message", None)
        if message is None:
            return ""

        content = getattr(message, "content", "")
        if isinstance(content, str):
            return content
        if content is None:
            return ""
        return str(content)


def build_messages(system_prompt: str, user_query: str, files: list[InlineFile]) -> list[dict[str, Any]]:
    if not files:
        user_content: Any = user_query
    else:
        # attachments go before the text, matching how the UI assembles parts
        user_content = [
            {
                "type": "image_url",
                "image_url": {"url": f"data:{item.mime_type};base64,{item.base64}"},
            }
            for item in files
        ]
        user_content.append({"type": "text", "text": user_query})

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_content},
    ]


def parse_json(content: str) -> Any:
    """Parse a model's JSON payload, tolerating a fenced code block.

    Returns None for an empty payload; raises ValueError when the text is
    not JSON.
    """
    candidate = content.strip()
    if not candidate:
        return None

    if "```" in candidate:
        parts = candidate.split("```")
        for part in parts:
            part = part.strip()
            if part.startswith("json"):
                part = part[4:].strip()
            if part.startswith(("{", "[")) and part.endswith(("}", "]")):
                candidate = part
                break

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("Failed to parse JSON model output")
        raise ValueError(f"model returned malformed JSON: {exc}") from exc


class ProviderPool:
    def __init__(self, settings: Settings):
        self.settings = settings
        self._genai: LLMProvider | None = None

    def genai(self) -> LLMProvider:
        if self._genai is None:
            self._genai = LLMProvider(
                ProviderConfig(
                    name="genai",
                    base_url=self.settings.genai_base_url,
                    api_key=self.settings.api_key,
                    timeout_sec=self.settings.genai_timeout_sec,
                )
            )
        return self._genai


def response_format_for(schema: dict[str, Any]) -> dict[str, Any]:
    if not schema:
        return {"type": "json_object"}
    return {
        "type": "json_schema",
        "json_schema": {"name": "response", "schema": normalize_schema(schema)},
    }
