from __future__ import annotations

import logging

import requests
from bs4 import BeautifulSoup

from talentdesk.config import Settings, get_settings
from talentdesk.types import SearchSnippet

logger = logging.getLogger(__name__)


USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class WebSearcher:
    """Fetches live web results used to ground a model call."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def search(self, query: str) -> list[SearchSnippet]:
        if not self.settings.search_enabled or not query.strip():
            return []

        try:
            response = requests.post(
                self.settings.search_url,
                data={"q": query},
                timeout=self.settings.search_timeout_sec,
                headers={"User-Agent": USER_AGENT},
            )
            response.raise_for_status()
        except Exception as exc:
            logger.warning("Web search failed for %r: %s", query[:80], exc)
            return []

        return parse_search_results(response.text, limit=self.settings.search_max_results)


def parse_search_results(html: str, *, limit: int) -> list[SearchSnippet]:
    soup = BeautifulSoup(html, "html.parser")
    snippets: list[SearchSnippet] = []
    for result in soup.select(".result"):
        link = result.select_one("a.result__a")
        if link is None:
            continue
        body = result.select_one(".result__snippet")
        snippets.append(
            SearchSnippet(
                title=link.get_text(" ", strip=True),
                url=str(link.get("href", "")),
                snippet=body.get_text(" ", strip=True) if body is not None else "",
            )
        )
        if len(snippets) >= limit:
            break
    return snippets


def format_snippets(snippets: list[SearchSnippet]) -> str:
    lines = []
    for index, item in enumerate(snippets, start=1):
        lines.append(f"{index}. {item.title} ({item.url})")
        if item.snippet:
            lines.append(f"   {item.snippet}")
    return "\n".join(lines)
