"""components.dev_log — Structured diagnostic event log.

A ring buffer that records ignored inputs, invariant violations and
session transitions.  Nothing here is shown to the player; it exists
so a developer can see why the engine refused an input.

Usage:
    log = DevLog()
    log.record("input", "unknown option", details={"option": "maybe"})

Each entry is a dict:
    {"t": float, "day": int, "cat": str, "msg": str, "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of engine events for diagnostics."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 500

    def record(self, cat: str, msg: str, *, t: float = 0.0, day: int = 0,
               details: dict | None = None) -> None:
        self.entries.append({
            "t": t,
            "day": day,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]
