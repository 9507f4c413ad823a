from __future__ import annotations

import asyncio
import threading

from talentdesk.core.events import EventBus
from talentdesk.core.scheduler import BROADCAST_CHANNEL, MatchScheduler
from talentdesk.errors import UpstreamError
from talentdesk.types import RecommendedCandidate


def _candidate(candidate_id: int, name: str, score: int) -> RecommendedCandidate:
    return RecommendedCandidate(
        id=candidate_id,
        candidate_name=name,
        anonymized_result=f"{name} profile",
        fit_summary_result=f"{name} fit",
        match_score=score,
        justification="matches the role",
        pipeline_name="Engineering",
    )


def test_rapid_updates_run_matching_once_with_latest_text() -> None:
    calls: list[str] = []

    def runner(job_description: str) -> list[RecommendedCandidate]:
        calls.append(job_description)
        return [_candidate(1, "Alpha", 88)]

    async def scenario():
        scheduler = MatchScheduler(runner, delay_sec=0.05)
        for text in ("S", "Se", "Senior", "Senior Python Engineer"):
            await scheduler.update(text)
        await scheduler.drain()
        return scheduler.snapshot()

    state = asyncio.run(scenario())

    assert calls == ["Senior Python Engineer"]
    assert state.generation == 4
    assert state.applied_generation == 4
    assert state.message == "Found 1 potential match(es)."
    assert [item.candidate_name for item in state.recommendations] == ["Alpha"]


def test_stale_result_is_discarded_when_a_newer_run_exists() -> None:
    started = threading.Event()
    release = threading.Event()

    def runner(job_description: str) -> list[RecommendedCandidate]:
        if job_description == "first draft":
            started.set()
            release.wait(5)
            return [_candidate(1, "Stale", 99)]
        return [_candidate(2, "Fresh", 70)]

    async def scenario():
        scheduler = MatchScheduler(runner, delay_sec=0.01)
        await scheduler.update("first draft")
        await asyncio.to_thread(started.wait, 5)
        await scheduler.update("final draft")
        await asyncio.sleep(0.1)
        release.set()
        await scheduler.drain()
        return scheduler.snapshot()

    state = asyncio.run(scenario())

    assert state.applied_generation == 2
    assert state.job_description == "final draft"
    assert [item.candidate_name for item in state.recommendations] == ["Fresh"]
    assert state.is_matching is False


def test_failed_run_clears_results_and_reports_error() -> None:
    def runner(job_description: str) -> list[RecommendedCandidate]:
        raise UpstreamError("model unavailable")

    async def scenario():
        scheduler = MatchScheduler(runner, delay_sec=0)
        scheduler.state.recommendations = [_candidate(1, "Old", 50)]
        return await scheduler.run_now("Data engineer")

    state = asyncio.run(scenario())

    assert state.recommendations == []
    assert state.message == "An error occurred during AI matching."
    assert state.is_matching is False


def test_empty_results_report_no_matches() -> None:
    async def scenario():
        scheduler = MatchScheduler(lambda text: [], delay_sec=0)
        return await scheduler.run_now("Data engineer")

    assert asyncio.run(scenario()).message == "AI matching returned no results."


def _collect_until_applied(bus: EventBus, action) -> list[dict]:
    async def scenario():
        stream = bus.subscribe(BROADCAST_CHANNEL)
        events: list[dict] = []

        async def read() -> None:
            async for event in stream:
                events.append(event)
                if not event["isMatching"]:
                    return

        reader = asyncio.create_task(read())
        await asyncio.sleep(0.01)
        await action()
        await asyncio.wait_for(reader, timeout=1)
        await stream.aclose()
        return events

    return asyncio.run(scenario())


def test_scanning_state_then_applied_state_are_published() -> None:
    bus = EventBus()
    scheduler = MatchScheduler(
        lambda text: [_candidate(3, "Gamma", 64)],
        delay_sec=0,
        event_bus=bus,
        candidate_counter=lambda: 2,
    )

    events = _collect_until_applied(bus, lambda: scheduler.run_now("Product manager"))

    scanning, applied = events
    assert scanning["isMatching"] is True
    assert scanning["message"] == "Scanning 2 candidate(s) with Gemini Pro..."
    assert scanning["appliedGeneration"] == 0
    assert applied["isMatching"] is False
    assert applied["jobDescription"] == "Product manager"
    assert applied["recommendations"][0]["candidateName"] == "Gamma"
    assert applied["recommendations"][0]["matchScore"] == 64


def test_failed_run_publishes_finished_state() -> None:
    def runner(job_description: str) -> list[RecommendedCandidate]:
        raise UpstreamError("model unavailable")

    bus = EventBus()
    scheduler = MatchScheduler(runner, delay_sec=0, event_bus=bus)

    events = _collect_until_applied(bus, lambda: scheduler.run_now("Data engineer"))

    assert events[-1]["isMatching"] is False
    assert events[-1]["message"] == "An error occurred during AI matching."


def test_empty_pool_or_blank_text_skips_the_model() -> None:
    calls: list[str] = []

    def runner(job_description: str) -> list[RecommendedCandidate]:
        calls.append(job_description)
        return []

    async def scenario():
        empty_pool = MatchScheduler(runner, delay_sec=0, candidate_counter=lambda: 0)
        empty_pool.state.recommendations = [_candidate(1, "Old", 50)]
        first = await empty_pool.run_now("Data engineer")

        blank = MatchScheduler(runner, delay_sec=0, candidate_counter=lambda: 4)
        second = await blank.run_now("   ")
        return first, second

    first, second = asyncio.run(scenario())

    assert calls == []
    assert first.recommendations == []
    assert first.message == ""
    assert first.applied_generation == 1
    assert second.message == ""


def test_refresh_rematches_current_text_after_pool_change() -> None:
    pool = {"names": ["Alpha", "Beta"]}
    calls: list[str] = []

    def runner(job_description: str) -> list[RecommendedCandidate]:
        calls.append(job_description)
        return [_candidate(index, name, 80 - index) for index, name in enumerate(pool["names"], start=1)]

    async def scenario():
        scheduler = MatchScheduler(runner, delay_sec=0.01)
        await scheduler.run_now("Backend engineer")
        pool["names"] = ["Alpha"]
        await scheduler.refresh()
        await scheduler.drain()
        return scheduler.snapshot()

    state = asyncio.run(scenario())

    assert calls == ["Backend engineer", "Backend engineer"]
    assert state.applied_generation == 2
    assert [item.candidate_name for item in state.recommendations] == ["Alpha"]


def test_refresh_without_text_does_nothing() -> None:
    async def scenario():
        scheduler = MatchScheduler(lambda text: [], delay_sec=0)
        state = await scheduler.refresh()
        await scheduler.drain()
        return state

    state = asyncio.run(scenario())

    assert state.generation == 0
