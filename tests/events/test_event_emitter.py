"""
Tests for the event system.

This module contains tests for the EventEmitter and EventBus classes
to ensure they provide the expected behavior for event handling.
"""

from unittest.mock import MagicMock

from holecard.events import EventEmitter, EventBus, EngineEventType


def test_on_with_string_event_type():
    """Test subscribing to an event with a string event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on("test_event", callback)

    test_data = {"value": "test"}
    emitter.emit("test_event", test_data)
    callback.assert_called_once_with(test_data)

    # Unsubscribe and emit again
    unsubscribe()
    emitter.emit("test_event", {"value": "test2"})
    assert callback.call_count == 1
    # A second unsubscribe is harmless
    unsubscribe()


def test_on_with_enum_event_type():
    """Test subscribing to an event with an enum event type."""
    emitter = EventEmitter()
    callback = MagicMock()

    emitter.on(EngineEventType.CARD_DEALT, callback)

    test_data = {"card": "ace of spades"}
    emitter.emit(EngineEventType.CARD_DEALT, test_data)
    callback.assert_called_once_with(test_data)

    # Enum and name refer to the same event
    emitter.emit("CARD_DEALT", test_data)
    assert callback.call_count == 2


def test_listeners_run_in_subscription_order():
    emitter = EventEmitter()
    calls = []

    emitter.on("evt", lambda data: calls.append("first"))
    emitter.on("evt", lambda data: calls.append("second"))
    emitter.on("other", lambda data: calls.append("other"))

    emitter.emit("evt", {})
    assert calls == ["first", "second"]


def test_on_any_receives_event_name():
    """Test that global handlers see every event with its name."""
    emitter = EventEmitter()
    callback = MagicMock()

    unsubscribe = emitter.on_any(callback)
    emitter.emit(EngineEventType.PLAYER_BET, {"amount": 10})
    callback.assert_called_once_with(("PLAYER_BET", {"amount": 10}))

    unsubscribe()
    emitter.emit(EngineEventType.PLAYER_BET, {"amount": 20})
    assert callback.call_count == 1


def test_failing_handler_does_not_stop_others(caplog):
    """Test that an exception in one handler is logged and others still run."""
    emitter = EventEmitter()
    callback = MagicMock()

    def broken(data):
        raise RuntimeError("boom")

    emitter.on("evt", broken)
    emitter.on("evt", callback)

    emitter.emit("evt", {"x": 1})

    callback.assert_called_once_with({"x": 1})
    assert "Error in event handler for evt" in caplog.text


def test_handler_may_unsubscribe_while_handling():
    emitter = EventEmitter()
    calls = []
    unsubscribe = None

    def first_only(data):
        calls.append(data)
        unsubscribe()

    unsubscribe = emitter.on("evt", first_only)
    emitter.emit("evt", {"n": 1})
    emitter.emit("evt", {"n": 2})
    assert calls == [{"n": 1}]


def test_event_bus_singleton():
    """Test that the EventBus hands out one shared emitter until reset."""
    first = EventBus.get_instance()
    assert EventBus.get_instance() is first

    EventBus.reset()
    assert EventBus.get_instance() is not first
