"""core/events.py — Lightweight event bus.

Decouples the engine, which *signals* what happened, from whatever
presentation layer *reacts* to it::

    from core.events import EventBus, DayAdvanced
    bus = EventBus()
    bus.subscribe("DayAdvanced", lambda e: print(e.day))
    bus.emit(DayAdvanced(day=2, community_level=0.09))
    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
import traceback
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class SessionStarted:
    epoch: int
    agent: dict = field(default_factory=dict)


@dataclass
class VisitStarted:
    location_id: str
    label: str = ""


@dataclass
class PromptShown:
    """A decision prompt is waiting for an answer."""
    location_id: str
    decision_id: str
    prompt: str = ""
    options: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class VisitAbandoned:
    """The player backed out, or chose an answer that returns to town."""
    location_id: str
    reason: str = ""


@dataclass
class DayAdvanced:
    day: int
    community_level: float = 0.0
    location_id: str = ""


@dataclass
class PlayerInfected:
    day: int
    location_id: str = ""
    days_survived: int = 0
    probability: float = 0.0


@dataclass
class GameWon:
    day: int
    days_survived: int = 0


@dataclass
class AdvisoryShown:
    text: str
    duration: float = 0.0


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus owned by the controller."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"DayAdvanced"``.
        """
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        Handlers may emit new events — those are processed in the
        same drain pass (breadth-first).
        """
        processed = 0
        safety = 1000  # prevent infinite loops
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def pending(self) -> list[Any]:
        """Events emitted but not yet drained (oldest first)."""
        return list(self._queue)
