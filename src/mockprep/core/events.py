from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Any, Literal

NoticeLevel = Literal["info", "success", "warning", "error"]


def make_notice(level: NoticeLevel, message: str, **extra: Any) -> dict[str, Any]:
    return {
        "level": level,
        "message": message,
        "created_at": datetime.now(UTC).isoformat(),
        **extra,
    }


class EventBus:
    """Per-user fan-out of notices; every subscriber gets its own queue."""

    def __init__(self) -> None:
        self._queues: dict[str, list[asyncio.Queue[dict[str, Any]]]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def publish(self, channel: str, event: dict[str, Any]) -> None:
        async with self._lock:
            for queue in list(self._queues.get(channel, [])):
                await queue.put(event)

    def publish_nowait(self, channel: str, event: dict[str, Any]) -> None:
        for queue in list(self._queues.get(channel, [])):
            queue.put_nowait(event)

    def subscriber_count(self, channel: str) -> int:
        return len(self._queues.get(channel, []))

    async def subscribe(self, channel: str) -> AsyncIterator[dict[str, Any]]:
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()
        async with self._lock:
            self._queues[channel].append(queue)

        try:
            while True:
                event = await queue.get()
                yield event
        finally:
            async with self._lock:
                if queue in self._queues.get(channel, []):
                    self._queues[channel].remove(queue)


class Notifier:
    """Keeps the notices a component raised and forwards them to the bus."""

    def __init__(self, event_bus: EventBus | None, channel: str, source: str):
        self.event_bus = event_bus
        self.channel = channel
        self.source = source
        self.history: list[dict[str, Any]] = []

    def __call__(self, level: NoticeLevel, message: str, **extra: Any) -> dict[str, Any]:
        notice = make_notice(level, message, source=self.source, **extra)
        self.history.append(notice)
        if self.event_bus is not None:
            self.event_bus.publish_nowait(self.channel, notice)
        return notice

    def messages(self, level: NoticeLevel | None = None) -> list[str]:
        return [item["message"] for item in self.history if level is None or item["level"] == level]
