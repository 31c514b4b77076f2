import asyncio

from mockprep.core.events import EventBus, Notifier
from mockprep.core.runtime import get_event_bus, user_notifier


def test_user_notifier_publishes_on_the_shared_bus() -> None:
    async def scenario() -> dict:
        stream = get_event_bus().subscribe("user-42")
        pending = asyncio.ensure_future(stream.__anext__())
        await asyncio.sleep(0)

        user_notifier("user-42", "verification")("success", "You're applicable for this job!")
        event = await asyncio.wait_for(pending, timeout=1)
        await stream.aclose()
        return event

    event = asyncio.run(scenario())
    assert event["source"] == "verification"
    assert event["level"] == "success"
    assert get_event_bus() is get_event_bus()


def test_notifier_without_bus_keeps_history_only() -> None:
    notify = Notifier(None, "user-1", source="chatbot")
    notify("info", "first")
    notify("error", "second", action="save session")

    assert notify.messages() == ["first", "second"]
    assert notify.messages("error") == ["second"]
    assert notify.history[1]["action"] == "save session"


def test_publish_reaches_every_subscriber_of_a_channel() -> None:
    async def scenario() -> list[dict]:
        bus = EventBus()
        first, second = bus.subscribe("room"), bus.subscribe("room")
        waits = [asyncio.ensure_future(first.__anext__()), asyncio.ensure_future(second.__anext__())]
        await asyncio.sleep(0)
        assert bus.subscriber_count("room") == 2

        await bus.publish("room", {"message": "hello"})
        events = await asyncio.gather(*waits)
        await first.aclose()
        await second.aclose()
        assert bus.subscriber_count("room") == 0
        return events

    assert [event["message"] for event in asyncio.run(scenario())] == ["hello", "hello"]
