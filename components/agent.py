"""components.agent — Per-playthrough agent profile.

Brackets and multipliers follow the agent-state table of the COVID-19
mitigation study the game is built on (age, comorbidities, employment).
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class AgeBracket:
    id: str
    label: str
    min_age: int
    max_age: int
    susceptibility: float


AGE_BRACKETS: tuple[AgeBracket, ...] = (
    AgeBracket("0-19",  "Age 0-19",   0, 19, 0.95),
    AgeBracket("20-43", "Age 20-43", 20, 43, 1.0),
    AgeBracket("44-53", "Age 44-53", 44, 53, 1.05),
    AgeBracket("54-63", "Age 54-63", 54, 63, 1.1),
    AgeBracket("64-73", "Age 64-73", 64, 73, 1.15),
    AgeBracket("74-83", "Age 74-83", 74, 83, 1.2),
    AgeBracket("84+",   "Age 84+",   84, 99, 1.25),
)

# comorbidity count → susceptibility multiplier (2 means "2 or more")
COMORBIDITY_MULT: dict[int, float] = {0: 1.0, 1: 1.08, 2: 1.15}

COMORBIDITY_LABELS: dict[int, str] = {
    0: "No comorbidities",
    1: "1 comorbidity",
    2: "2+ comorbidities",
}


@dataclass(frozen=True)
class AgentProfile:
    """Immutable demographic profile drawn once per session.

    ``employment_type`` is only set for employed agents
    ("essential" / "nonessential").  Employment, gender and the
    senior-center flag are informational; only ``susceptibility``
    feeds the risk model.
    """
    age_bracket: AgeBracket
    comorbidities: int
    employment_status: str           # employed | student | unemployed
    employment_type: str | None
    gender: str                      # female | male
    senior_center: bool = False

    @property
    def susceptibility(self) -> float:
        return (self.age_bracket.susceptibility
                * COMORBIDITY_MULT.get(self.comorbidities, 1.0))

    @property
    def age_label(self) -> str:
        return self.age_bracket.label

    @property
    def comorbidity_label(self) -> str:
        return COMORBIDITY_LABELS.get(self.comorbidities, "Unknown")

    def describe(self) -> str:
        """One-line summary, e.g. ``"♀ Age 20-43, No comorbidities"``."""
        symbol = "♀" if self.gender == "female" else "♂"
        return f"{symbol} {self.age_label}, {self.comorbidity_label}"

    def to_dict(self) -> dict:
        return {
            "age_bracket": self.age_bracket.id,
            "age_label": self.age_label,
            "comorbidities": self.comorbidities,
            "comorbidity_label": self.comorbidity_label,
            "employment_status": self.employment_status,
            "employment_type": self.employment_type,
            "gender": self.gender,
            "senior_center": self.senior_center,
            "susceptibility": self.susceptibility,
        }


# Largest multiplier any generated agent can carry.
MAX_SUSCEPTIBILITY: float = (max(b.susceptibility for b in AGE_BRACKETS)
                             * max(COMORBIDITY_MULT.values()))
