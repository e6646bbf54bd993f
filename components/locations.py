"""components.locations — Static location / decision configuration.

Read-only after load.  See ``data/locations.toml`` for the table and
``logic.locations`` for the loader.
"""

from __future__ import annotations
from dataclasses import dataclass, field


NEUTRAL_LOCATION = "overworld"


@dataclass(frozen=True)
class Option:
    """One answer to a decision prompt.

    ``risk_mod`` scales the visit risk: 0 removes it, 1 leaves it alone.
    The two routing flags replace any matching on decision ids:

    terminates_visit    the visit resolves right after this answer
    returns_to_neutral  back to town; the visit is dropped, no day passes
    """
    id: str
    label: str
    risk_mod: float = 1.0
    uses_precaution: bool = False
    terminates_visit: bool = False
    returns_to_neutral: bool = False


@dataclass(frozen=True)
class Decision:
    id: str
    prompt: str
    options: tuple[Option, ...] = ()

    def option(self, option_id: str) -> Option | None:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


@dataclass(frozen=True)
class LocationDefinition:
    id: str
    label: str
    scene: str = ""
    base_contacts: int = 0
    decisions: tuple[Decision, ...] = field(default_factory=tuple)

    def decision_at(self, step: int) -> Decision | None:
        if 0 <= step < len(self.decisions):
            return self.decisions[step]
        return None
