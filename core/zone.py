"""core/zone.py — Enterable zones on the town map and the zone locator.

Zones are axis-aligned rectangles in the same percent coordinate space
as the player (0–100 on both axes).  ``locate()`` grows every rectangle
by a buffer margin so the player does not need to stand exactly inside
a building to enter it.

Overlap rule: buffers can overlap a neighbouring zone (school and
social share a strip by construction).  The zone declared *first* in
``data/zones.toml`` always wins, even when a later zone contains the
point outright.  Distance plays no part.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib

from core.tuning import DATA_DIR, get


@dataclass(frozen=True)
class ZoneRect:
    id: str
    x: float
    y: float
    w: float
    h: float

    def contains(self, px: float, py: float, buffer: float = 0.0) -> bool:
        return (self.x - buffer <= px <= self.x + self.w + buffer
                and self.y - buffer <= py <= self.y + self.h + buffer)


DEFAULT_ZONES: tuple[ZoneRect, ...] = (
    ZoneRect("home",     10.0, 50.0, 18.0, 30.0),
    ZoneRect("work",     45.0, 15.0, 20.0, 40.0),
    ZoneRect("school",   75.0, 18.0, 18.0, 35.0),
    ZoneRect("social",   72.0, 52.0, 22.0, 32.0),
    ZoneRect("hospital", 10.0, 15.0, 18.0, 25.0),
)


def zone_buffer() -> float:
    return float(get("zones", "buffer", 2.0))


def locate(position: tuple[float, float], zones: Iterable[ZoneRect],
           buffer: float | None = None) -> str | None:
    """Return the id of the first zone (in declaration order) whose
    buffered rectangle contains *position*, or ``None``."""
    if buffer is None:
        buffer = zone_buffer()
    px, py = position
    for z in zones:
        if z.contains(px, py, buffer):
            return z.id
    return None


def load_zones(path: str | Path | None = None) -> tuple[ZoneRect, ...]:
    """Read ``[[zone]]`` entries in file order.

    Falls back to ``DEFAULT_ZONES`` when the file is missing, malformed
    or holds no usable zone.  Malformed entries are skipped with a notice.
    """
    path = DATA_DIR / "zones.toml" if path is None else Path(path)
    if not path.exists():
        print(f"[ZONES] {path} not found — using built-in layout")
        return DEFAULT_ZONES

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        print(f"[ZONES] {path} is malformed ({exc}) — using built-in layout")
        return DEFAULT_ZONES

    zones: list[ZoneRect] = []
    for raw in data.get("zone", []):
        try:
            zones.append(ZoneRect(
                id=str(raw["id"]),
                x=float(raw["x"]), y=float(raw["y"]),
                w=float(raw["w"]), h=float(raw["h"]),
            ))
        except (KeyError, TypeError, ValueError) as exc:
            print(f"[ZONES] skipping malformed zone {raw!r}: {exc}")
    if not zones:
        print(f"[ZONES] no usable zones in {path} — using built-in layout")
        return DEFAULT_ZONES
    print(f"[ZONES] loaded {len(zones)} zones from {path}")
    return tuple(zones)
