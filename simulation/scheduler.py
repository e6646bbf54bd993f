"""simulation/scheduler.py — Deferred presentation effects.

A small time-ordered queue for the two things that outlive a single
input: the advisory message that clears itself after a few seconds and
the walking flag that drops shortly after the last move.  Effects only
touch presentation flags, never session data.

    scheduler = EffectScheduler()
    scheduler.post(time=now + 2.0, kind="CLEAR_ADVISORY", epoch=3)
    ...
    scheduler.tick(current_time=now + 2.5)

Each effect carries the session epoch it was posted under.  Starting a
new session calls ``cancel_all()`` and every later ``tick`` skips
effects from older epochs as well.
"""

from __future__ import annotations
import heapq
from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(order=True)
class ScheduledEffect:
    """One pending effect, ordered by ``time`` (then insertion)."""
    time: float
    # heapq tiebreaker (insertion order) — avoids comparing kind
    _seq: int = field(compare=True, repr=False)
    kind: str = field(compare=False, default="")
    epoch: int = field(compare=False, default=0)
    data: dict[str, Any] = field(compare=False, default_factory=dict)
    cancelled: bool = field(compare=False, default=False)


class EffectScheduler:
    """Priority-queue scheduler for fire-and-forget deferred effects."""

    def __init__(self) -> None:
        self._queue: list[ScheduledEffect] = []
        self._seq: int = 0
        self._handlers: dict[str, Callable[[ScheduledEffect], None]] = {}
        self.epoch: int = 0

    # ── Posting ──────────────────────────────────────────────────────

    def post(self, time: float, kind: str, epoch: int | None = None,
             data: dict[str, Any] | None = None) -> ScheduledEffect:
        """Schedule *kind* to fire at *time* seconds."""
        self._seq += 1
        eff = ScheduledEffect(
            time=time,
            _seq=self._seq,
            kind=kind,
            epoch=self.epoch if epoch is None else epoch,
            data=data or {},
        )
        heapq.heappush(self._queue, eff)
        return eff

    def post_delta(self, current_time: float, delta: float, kind: str,
                   data: dict[str, Any] | None = None) -> ScheduledEffect:
        """Post an effect ``delta`` seconds from ``current_time``."""
        return self.post(current_time + delta, kind, data=data)

    # ── Cancellation ─────────────────────────────────────────────────

    def cancel_kind(self, kind: str) -> int:
        """Cancel pending effects of one kind.  Returns count cancelled."""
        count = 0
        for eff in self._queue:
            if not eff.cancelled and eff.kind == kind:
                eff.cancelled = True
                count += 1
        return count

    def cancel_all(self, new_epoch: int | None = None) -> int:
        """Drop everything and move to *new_epoch* (or the next one)."""
        count = sum(1 for e in self._queue if not e.cancelled)
        self._queue.clear()
        self.epoch = self.epoch + 1 if new_epoch is None else new_epoch
        return count

    # ── Handlers ─────────────────────────────────────────────────────

    def register_handler(self, kind: str,
                         handler: Callable[[ScheduledEffect], None]) -> None:
        self._handlers[kind] = handler

    # ── Tick ─────────────────────────────────────────────────────────

    def tick(self, current_time: float) -> int:
        """Fire every effect due at or before *current_time*.

        Returns the number of effects dispatched.
        """
        count = 0
        while self._queue:
            if self._queue[0].time > current_time:
                break
            eff = heapq.heappop(self._queue)
            if eff.cancelled or eff.epoch != self.epoch:
                continue
            handler = self._handlers.get(eff.kind)
            if handler:
                handler(eff)
                count += 1
        return count

    # ── Queries ──────────────────────────────────────────────────────

    def pending_count(self, kind: str | None = None) -> int:
        return sum(1 for e in self._queue
                   if not e.cancelled and e.epoch == self.epoch
                   and (kind is None or e.kind == kind))
