"""logic/locations.py — Location / decision table loader.

The table is plain TOML (``data/locations.toml``), one top-level table
per location id with an ordered ``decisions`` array::

    [work]
    label = "Work"

    [[work.decisions]]
    id = "work_from_home"
    prompt = "Work from Home today?"
    options = [
        { id = "yes", label = "Yes (Low Risk)", risk_mod = 0.0 },
        { id = "no",  label = "No",             risk_mod = 1.0 },
    ]

Usage:
    table = LocationTable.from_file()
    work = table.get("work")
    work.decision_at(0).prompt      # → "Work from Home today?"

``terminates_visit`` defaults to ``risk_mod == 0`` when an option does
not set it, so zero-risk answers end the visit without any code knowing
their ids.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib

from components.locations import (
    Decision, LocationDefinition, NEUTRAL_LOCATION, Option,
)
from core.tuning import DATA_DIR


class LocationTable:
    """Read-only registry of every LocationDefinition."""

    def __init__(self, locations: dict[str, LocationDefinition] | None = None):
        self._locations: dict[str, LocationDefinition] = dict(locations or {})
        if NEUTRAL_LOCATION not in self._locations:
            self._locations[NEUTRAL_LOCATION] = LocationDefinition(
                id=NEUTRAL_LOCATION, label="Town", scene="scene-overworld")

    def get(self, location_id: str) -> LocationDefinition | None:
        return self._locations.get(location_id)

    def __contains__(self, location_id: str) -> bool:
        return location_id in self._locations

    def ids(self) -> list[str]:
        return list(self._locations)

    # ── loading ─────────────────────────────────────────────────────

    @classmethod
    def from_dict(cls, data: dict) -> LocationTable:
        """Build a table from parsed TOML.  Malformed decisions are skipped
        with a notice; the rest of the location survives."""
        locations = {}
        for loc_id, ldata in data.items():
            if not isinstance(ldata, dict):
                continue
            decisions = []
            for d in ldata.get("decisions", []):
                try:
                    decisions.append(_parse_decision(d))
                except (KeyError, TypeError, ValueError, AttributeError) as exc:
                    print(f"[LOCATIONS] {loc_id}: skipping malformed decision {d!r}: {exc}")
            locations[loc_id] = LocationDefinition(
                id=loc_id,
                label=str(ldata.get("label", loc_id.title())),
                scene=str(ldata.get("scene", f"scene-{loc_id}")),
                base_contacts=int(ldata.get("base_contacts", 0)),
                decisions=tuple(decisions),
            )
        return cls(locations)

    @classmethod
    def from_file(cls, filepath: str | Path | None = None) -> LocationTable:
        filepath = DATA_DIR / "locations.toml" if filepath is None else Path(filepath)
        if not filepath.exists():
            print(f"[LOCATIONS] file not found: {filepath}")
            return cls()

        try:
            with open(filepath, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            print(f"[LOCATIONS] {filepath} is malformed ({exc}) — town only")
            return cls()

        table = cls.from_dict(data)
        print(f"[LOCATIONS] loaded {len(table.ids())} locations")
        return table


def _parse_decision(d: dict) -> Decision:
    return Decision(
        id=str(d["id"]),
        prompt=str(d.get("prompt", "")),
        options=tuple(_parse_option(o) for o in d.get("options", [])),
    )


def _parse_option(o: dict) -> Option:
    risk_mod = float(o.get("risk_mod", 1.0))
    return Option(
        id=str(o["id"]),
        label=str(o.get("label", o["id"])),
        risk_mod=risk_mod,
        uses_precaution=bool(o.get("uses_precaution", False)),
        terminates_visit=bool(o.get("terminates_visit", risk_mod == 0)),
        returns_to_neutral=bool(o.get("returns_to_neutral", False)),
    )
