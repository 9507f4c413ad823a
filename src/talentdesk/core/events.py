from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from typing import Any


class EventBus:
    def __init__(self) -> None:
        self._queues: dict[str, list[asyncio.Queue[dict[str, Any]]]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def publish(self, channel: str, event: dict[str, Any]) -> None:
        async with self._lock:
            for queue in list(self._queues.get(channel, [])):
                await queue.put(event)

    async def subscribe(
        self, channel: str, initial: dict[str, Any] | None = None
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield events published on ``channel``, starting with ``initial`` when given."""
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        async with self._lock:
            self._queues[channel].append(queue)
            if initial is not None:
                queue.put_nowait(initial)

        try:
            while True:
                event = await queue.get()
                yield event
        finally:
            async with self._lock:
                if queue in self._queues.get(channel, []):
                    self._queues[channel].remove(queue)
