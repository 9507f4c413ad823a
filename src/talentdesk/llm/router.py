from __future__ import annotations

import logging
from typing import Any, Protocol

from talentdesk.config import Settings, get_settings
from talentdesk.core.search import WebSearcher, format_snippets
from talentdesk.errors import AIConfigurationError, StructuredOutputError, UpstreamError
from talentdesk.llm.prompts import GROUNDING_PROMPT
from talentdesk.llm.providers import LLMProvider, ProviderPool
from talentdesk.llm.response_schemas import missing_required
from talentdesk.types import InlineFile, SearchSnippet

logger = logging.getLogger(__name__)


class Searcher(Protocol):
    def search(self, query: str) -> list[SearchSnippet]: ...


class LLMRouter:
    """Entry point for every model call: text, multimodal and structured JSON."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        provider: LLMProvider | None = None,
        searcher: Searcher | None = None,
    ):
        self.settings = settings or get_settings()
        self.pool = ProviderPool(self.settings)
        self._provider = provider
        self.searcher = searcher or WebSearcher(self.settings)

    def generate_text(self, user_query: str, system_prompt: str, use_search: bool = False) -> str:
        provider = self._require_provider()
        if use_search:
            user_query = self.ground(user_query)

        try:
            response = provider.complete_text(
                model=self._model_for("text"),
                system_prompt=system_prompt,
                user_query=user_query,
            )
        except Exception as exc:
            logger.warning("LLM text call failed provider=%s error=%s", provider.config.name, exc)
            raise UpstreamError("The AI model could not complete the request.") from exc
        return response.content

    def generate_multimodal(self, user_query: str, system_prompt: str, files: list[InlineFile]) -> str:
        provider = self._require_provider()
        try:
            response = provider.complete_text(
                model=self._model_for("multimodal"),
                system_prompt=system_prompt,
                user_query=user_query,
                files=files,
            )
        except Exception as exc:
            logger.warning("LLM multimodal call failed provider=%s error=%s", provider.config.name, exc)
            raise UpstreamError("The AI model could not complete the multimodal request.") from exc
        return response.content

    def generate_structured(
        self,
        user_query: str,
        system_prompt: str,
        response_schema: dict[str, Any],
        *,
        task: str = "structured",
    ) -> Any:
        provider = self._require_provider()
        try:
            data = provider.complete_json(
                model=self._model_for(task),
                system_prompt=system_prompt,
                user_query=user_query,
                schema=response_schema,
            )
        except ValueError as exc:
            raise StructuredOutputError("The AI model returned malformed JSON.") from exc
        except Exception as exc:
            logger.warning("LLM JSON call failed provider=%s error=%s", provider.config.name, exc)
            raise UpstreamError("The AI model could not complete the structured request.") from exc

        if data is None:
            raise StructuredOutputError("The AI model returned no result.")

        missing = missing_required(response_schema, data)
        if missing:
            logger.warning("Structured output missing required fields: %s", ", ".join(missing))
            raise StructuredOutputError(
                f"The AI model response is missing required field(s): {', '.join(missing)}"
            )
        return data

    def ground(self, user_query: str) -> str:
        snippets = self.searcher.search(user_query)
        if not snippets:
            logger.info("No search results for grounding; sending the ungrounded query")
            return user_query
        return GROUNDING_PROMPT.format(
            user_query=user_query,
            result_count=len(snippets),
            search_query=user_query[:120],
            results=format_snippets(snippets),
        )

    def _require_provider(self) -> LLMProvider:
        if self._provider is not None:
            return self._provider
        if not self.settings.ai_configured:
            raise AIConfigurationError("AI client not configured")
        return self.pool.genai()

    def _model_for(self, task: str) -> str:
        if task == "match":
            return self.settings.genai_match_model
        return self.settings.genai_model
