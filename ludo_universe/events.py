"""
Outbound notifications emitted by the turn engine.
Renderers, audio and announcers subscribe; the engine never waits on them.
"""

from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, DefaultDict, Deque, List, Type, TypeVar

from loguru import logger

from .types import Location


@dataclass(frozen=True, slots=True)
class GameEvent:
    pass


@dataclass(frozen=True, slots=True)
class RollStarted(GameEvent):
    player_index: int


@dataclass(frozen=True, slots=True)
class DiceResolved(GameEvent):
    player_index: int
    value: int
    legal_pieces: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class PieceMoved(GameEvent):
    player_index: int
    piece_id: int
    location: Location


@dataclass(frozen=True, slots=True)
class TurnChanged(GameEvent):
    player_index: int


@dataclass(frozen=True, slots=True)
class NoLegalMove(GameEvent):
    player_index: int


@dataclass(frozen=True, slots=True)
class BonusTurnGranted(GameEvent):
    player_index: int


@dataclass(frozen=True, slots=True)
class SessionClosed(GameEvent):
    pass


E = TypeVar("E", bound=GameEvent)
Listener = Callable[[GameEvent], None]


class EventBus:
    """Synchronous publish/subscribe keyed by event class.

    Events published from inside a listener are queued and delivered once the
    current event has reached every listener, so all subscribers see the same
    order.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[Type[GameEvent], List[Listener]] = defaultdict(
            list
        )
        self._catch_all: List[Listener] = []
        self._pending: Deque[GameEvent] = deque()
        self._dispatching = False

    def subscribe(
        self, event_type: Type[E], callback: Callable[[E], None]
    ) -> Callable[[], None]:
        """Register ``callback`` for ``event_type``; returns an unsubscribe hook."""
        self._listeners[event_type].append(callback)
        return lambda: self._listeners[event_type].remove(callback)

    def subscribe_all(self, callback: Listener) -> Callable[[], None]:
        self._catch_all.append(callback)
        return lambda: self._catch_all.remove(callback)

    def publish(self, event: GameEvent) -> None:
        self._pending.append(event)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._pending:
                self._dispatch(self._pending.popleft())
        finally:
            self._dispatching = False
            self._pending.clear()

    def _dispatch(self, event: GameEvent) -> None:
        logger.debug(f"Event: {event}")
        for callback in list(self._listeners.get(type(event), ())):
            callback(event)
        for callback in list(self._catch_all):
            callback(event)
