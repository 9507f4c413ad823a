from __future__ import annotations

import requests

from talentdesk.config import Settings
from talentdesk.core.search import WebSearcher, format_snippets, parse_search_results

RESULTS_HTML = """
<html><body>
  <div class="result">
    <h2><a class="result__a" href="https://example.com/salaries">Software Engineer Salaries 2025</a></h2>
    <a class="result__snippet">Median total compensation is $145,000 in Austin.</a>
  </div>
  <div class="result">
    <h2><a class="result__a" href="https://example.org/report">Tech Pay Report</a></h2>
  </div>
  <div class="result"><span>advert without a link</span></div>
  <div class="result">
    <h2><a class="result__a" href="https://example.net/third">Third result</a></h2>
    <a class="result__snippet">Should be cut by the limit.</a>
  </div>
</body></html>
"""


def test_parse_search_results_extracts_title_url_and_snippet() -> None:
    snippets = parse_search_results(RESULTS_HTML, limit=2)

    assert [item.title for item in snippets] == ["Software Engineer Salaries 2025", "Tech Pay Report"]
    assert snippets[0].url == "https://example.com/salaries"
    assert snippets[0].snippet.startswith("Median total compensation")
    assert snippets[1].snippet == ""


def test_format_snippets_numbers_each_result() -> None:
    text = format_snippets(parse_search_results(RESULTS_HTML, limit=2))

    assert text.splitlines()[0] == "1. Software Engineer Salaries 2025 (https://example.com/salaries)"
    assert text.splitlines()[2].startswith("2. Tech Pay Report")


def test_search_disabled_makes_no_request(monkeypatch) -> None:
    def fail_post(*args, **kwargs):
        raise AssertionError("network should not be used")

    monkeypatch.setattr("talentdesk.core.search.requests.post", fail_post)

    assert WebSearcher(Settings(search_enabled=False)).search("salary data") == []


def test_search_failure_returns_no_results(monkeypatch) -> None:
    def broken_post(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr("talentdesk.core.search.requests.post", broken_post)

    assert WebSearcher(Settings(search_enabled=True)).search("salary data") == []
