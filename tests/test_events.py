"""Tests for the event bus."""

import logging

from buddy_pocket.events import EventBus, LevelUp, ShopRotated


def test_publish_reaches_subscribers():
    bus = EventBus()
    seen = []
    bus.subscribe(seen.append)
    bus.publish(ShopRotated(week_id="2026-W10"))
    assert seen == [ShopRotated(week_id="2026-W10")]


def test_unsubscribe():
    bus = EventBus()
    seen = []
    unsubscribe = bus.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    bus.publish(LevelUp(level=2, levels_gained=1))
    assert seen == []


def test_failing_subscriber_is_logged_and_others_still_run(caplog):
    bus = EventBus()
    seen = []

    def broken(event):
        raise ValueError("boom")

    bus.subscribe(broken)
    bus.subscribe(seen.append)
    with caplog.at_level(logging.ERROR, logger="buddy_pocket.events"):
        bus.publish(LevelUp(level=3, levels_gained=1))
    assert len(seen) == 1
    assert "event subscriber failed" in caplog.text


def test_event_kind_serialises():
    assert LevelUp(level=2, levels_gained=1).model_dump()["kind"] == "level_up"
