from __future__ import annotations

from mockprep.core.events import EventBus, Notifier

_EVENT_BUS: EventBus | None = None


def get_event_bus() -> EventBus:
    global _EVENT_BUS
    if _EVENT_BUS is None:
        _EVENT_BUS = EventBus()
    return _EVENT_BUS


def user_notifier(user_id: str, source: str) -> Notifier:
    """Notifier publishing to the user's channel on the shared bus."""
    return Notifier(get_event_bus(), user_id, source=source)
