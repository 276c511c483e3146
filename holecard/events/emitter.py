"""
Event bus for the holecard engine.

The engine announces each step of a round on a process-wide bus: bets, cards,
the hole-card reveal, payouts and reshuffles. Listeners subscribe to one
event type with `on`, or to all of them with `on_any`. A listener that raises
is logged and the rest still run, so an observer cannot break a round.
"""

import logging
import threading
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List, Union

logger = logging.getLogger(__name__)


def _event_name(event_type: Union[str, Enum]) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """
    Dispatches event payloads to subscribed callbacks in subscription order.

    Listeners for a single type receive the payload dict. Listeners added
    with `on_any` receive an `(event_name, payload)` tuple.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)
        self._any_listeners: List[Callable] = []
        self._lock = threading.Lock()

    def on(self, event_type: Union[str, Enum], callback: Callable) -> Callable:
        """
        Subscribe `callback` to one event type.

        Returns:
            A function that removes the subscription
        """
        name = _event_name(event_type)
        with self._lock:
            self._listeners[name].append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._listeners[name]:
                    self._listeners[name].remove(callback)

        return unsubscribe

    def on_any(self, callback: Callable) -> Callable:
        """Subscribe `callback` to every event; returns the unsubscribe function."""
        with self._lock:
            self._any_listeners.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._any_listeners:
                    self._any_listeners.remove(callback)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        name = _event_name(event_type)
        with self._lock:
            calls = [(callback, data) for callback in self._listeners.get(name, [])]
            calls += [(callback, (name, data)) for callback in self._any_listeners]

        # Callbacks run outside the lock so they may subscribe or emit
        for callback, payload in calls:
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"Error in event handler for {name}: {e}", exc_info=True)


class EventBus:
    """
    Holder of the shared `EventEmitter`.

    The engine and the command-line summary both reach the same emitter
    through `get_instance`; `reset` drops it with all of its subscriptions.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        with cls._lock:
            if cls._instance is None:
                cls._instance = EventEmitter()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None


class EngineEventType(Enum):
    """Events emitted while a session is played."""

    # Session
    GAME_CREATED = "game_created"
    GAME_ENDED = "game_ended"
    ROUND_STARTED = "round_started"
    ROUND_ENDED = "round_ended"

    # Player
    PLAYER_BET = "player_bet"
    PLAYER_ACTION = "player_action"

    # Cards
    CARD_DEALT = "card_dealt"
    CARD_REVEALED = "card_revealed"
    SHUFFLE = "shuffle"

    # Hands
    HAND_BUSTED = "hand_busted"
    HAND_RESULT = "hand_result"

    DEALER_ACTION = "dealer_action"
    MONEY_PAYOUT = "money_payout"
