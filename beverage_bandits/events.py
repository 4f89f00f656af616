from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, List, Optional, Tuple, Type, TypeVar

from .components import Side

logger = logging.getLogger(__name__)

E = TypeVar("E")  # event type variable
Handler = Callable[[Any], None]


@dataclass(frozen=True)
class Event:
    """Base event marker class."""


# --- Battle events ---
@dataclass(frozen=True)
class UnitMoved(Event):
    entity: int
    source: Tuple[int, int]
    target: Tuple[int, int]


@dataclass(frozen=True)
class UnitAttacked(Event):
    attacker: int
    target: int
    damage: int
    remaining: int


@dataclass(frozen=True)
class UnitDied(Event):
    entity: int
    side: Side
    position: Tuple[int, int]


@dataclass(frozen=True)
class RoundCompleted(Event):
    round: int


@dataclass(frozen=True)
class CombatFinished(Event):
    rounds: int
    hit_points: int
    winner: Optional[Side]
    aborted: bool = False
    stalemate: bool = False


class EventBus:
    """
    Decoupled EventBus with once=True support.

    - handler failures are logged, the remaining handlers still run
    - unsubscribe by the handle id returned from subscribe()
    """

    def __init__(self) -> None:
        self._subs: DefaultDict[Type[Event], List[Tuple[int, bool, Handler]]] = defaultdict(list)
        self._next_id: int = 1

    def subscribe(self, event_type: Type[E], handler: Handler, *, once: bool = False) -> int:
        handle_id = self._next_id
        self._next_id += 1
        self._subs[event_type].append((handle_id, once, handler))
        return handle_id

    def unsubscribe(self, event_type: Type[E], handle_id: int) -> None:
        subs = self._subs.get(event_type)
        if not subs:
            return
        self._subs[event_type] = [t for t in subs if t[0] != handle_id]

    def publish(self, event: Event) -> None:
        subs = self._subs.get(type(event), [])
        if not subs:
            return

        remove_ids: List[int] = []
        for handle_id, once, handler in list(subs):
            try:
                handler(event)
                if once:
                    remove_ids.append(handle_id)
            except Exception:
                logger.exception("handler for %s failed", type(event).__name__)

        if remove_ids:
            self._subs[type(event)] = [t for t in self._subs[type(event)] if t[0] not in remove_ids]


# --- Viewer events ---
@dataclass(frozen=True)
class Quit(Event):
    pass


@dataclass(frozen=True)
class TogglePause(Event):
    pass


@dataclass(frozen=True)
class StepFrame(Event):
    delta: int


@dataclass(frozen=True)
class ToggleFlag(Event):
    name: str
