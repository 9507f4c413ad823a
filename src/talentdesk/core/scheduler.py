from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pydantic import Field

from talentdesk.core.events import EventBus
from talentdesk.errors import TalentDeskError
from talentdesk.types import CamelModel, RecommendedCandidate

logger = logging.getLogger(__name__)

BROADCAST_CHANNEL = "broadcast"

MatchRunner = Callable[[str], list[RecommendedCandidate]]
CandidateCounter = Callable[[], int]


class BroadcastState(CamelModel):
    job_description: str = ""
    generation: int = 0
    applied_generation: int = 0
    is_matching: bool = False
    message: str = ""
    recommendations: list[RecommendedCandidate] = Field(default_factory=list)


class MatchScheduler:
    """Debounces job-description edits into candidate matching runs.

    Every update bumps the generation and restarts the quiet-period timer.
    A timer that is still sleeping is cancelled; a run already in flight is
    left alone, but its result is discarded unless its generation is still
    the latest when it completes. Changes to the candidate pool go through
    ``refresh`` so the current text is matched again.
    """

    def __init__(
        self,
        runner: MatchRunner,
        *,
        delay_sec: float,
        event_bus: EventBus | None = None,
        candidate_counter: CandidateCounter | None = None,
    ):
        self.runner = runner
        self.delay_sec = delay_sec
        self.event_bus = event_bus
        self.candidate_counter = candidate_counter
        self.state = BroadcastState()
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()

    async def update(self, job_description: str) -> BroadcastState:
        self.state.job_description = job_description
        self.state.generation += 1
        generation = self.state.generation

        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.create_task(self._fire(generation, job_description))
        return self.snapshot()

    async def refresh(self) -> BroadcastState:
        if not self.state.job_description.strip():
            return self.snapshot()
        return await self.update(self.state.job_description)

    async def run_now(self, job_description: str) -> BroadcastState:
        self.state.job_description = job_description
        self.state.generation += 1
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
            self._timer = None
        await self._run(self.state.generation, job_description)
        return self.snapshot()

    async def drain(self) -> None:
        """Wait for the pending timer and every in-flight run to settle."""
        while True:
            pending = [task for task in [self._timer, *self._in_flight] if task is not None and not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    def snapshot(self) -> BroadcastState:
        return self.state.model_copy(deep=True)

    async def _fire(self, generation: int, job_description: str) -> None:
        await asyncio.sleep(self.delay_sec)
        task = asyncio.current_task()
        if self._timer is task:
            self._timer = None
        if task is not None:
            self._in_flight.add(task)
        try:
            await self._run(generation, job_description)
        finally:
            if task is not None:
                self._in_flight.discard(task)

    async def _run(self, generation: int, job_description: str) -> None:
        if generation != self.state.generation:
            return

        if not job_description.strip():
            self._apply(generation, [], "")
            await self._publish()
            return

        count = None
        if self.candidate_counter is not None:
            count = await asyncio.to_thread(self.candidate_counter)
            if generation != self.state.generation:
                return
            if count == 0:
                self._apply(generation, [], "")
                await self._publish()
                return

        self.state.is_matching = True
        self.state.message = (
            f"Scanning {count} candidate(s) with Gemini Pro..." if count is not None else "Scanning candidates..."
        )
        await self._publish()
        failed = False
        try:
            recommendations = await asyncio.to_thread(self.runner, job_description)
        except TalentDeskError as exc:
            logger.warning("Candidate matching failed generation=%s error=%s", generation, exc)
            recommendations, failed = [], True

        if generation != self.state.generation:
            logger.info(
                "Discarding stale match result generation=%s latest=%s", generation, self.state.generation
            )
            return

        self.state.is_matching = False
        if failed:
            message = "An error occurred during AI matching."
        elif recommendations:
            message = f"Found {len(recommendations)} potential match(es)."
        else:
            message = "AI matching returned no results."
        self._apply(generation, recommendations, message)
        await self._publish()

    def _apply(self, generation: int, recommendations: list[RecommendedCandidate], message: str) -> None:
        self.state.recommendations = recommendations
        self.state.applied_generation = generation
        self.state.message = message

    async def _publish(self) -> None:
        if self.event_bus is None:
            return
        await self.event_bus.publish(BROADCAST_CHANNEL, self.snapshot().model_dump(mode="json", by_alias=True))
