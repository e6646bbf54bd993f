"""components.session — The single game-session value.

``GameSession`` is frozen.  Every controller operation produces a new
one via ``dataclasses.replace``; nothing mutates a session in place, so
a rejected input can never leave half-applied state behind.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum

from components.agent import AgentProfile
from components.locations import NEUTRAL_LOCATION


class Outcome(Enum):
    NONE = "none"
    INFECTED = "infected"
    SURVIVED = "survived"


@dataclass(frozen=True)
class ChosenOption:
    option_id: str
    risk_mod: float
    uses_precaution: bool = False


@dataclass(frozen=True)
class DecisionTrace:
    """An in-progress location visit.

    ``choices`` maps decision id → the answer given.  Answering the same
    decision id again replaces the earlier entry.
    """
    location_id: str
    step: int = 0
    choices: dict[str, ChosenOption] = field(default_factory=dict)

    def with_choice(self, decision_id: str, choice: ChosenOption,
                    step: int) -> DecisionTrace:
        choices = dict(self.choices)
        choices[decision_id] = choice
        return DecisionTrace(self.location_id, step, choices)

    @property
    def composite_risk_mod(self) -> float:
        """Product of every chosen ``risk_mod``, recomputed on each call."""
        return math.prod(c.risk_mod for c in self.choices.values())

    @property
    def precaution_used(self) -> bool:
        return any(c.uses_precaution for c in self.choices.values())


@dataclass(frozen=True)
class GameSession:
    agent: AgentProfile
    day: int = 1
    community_level: float = 0.05
    location: str = NEUTRAL_LOCATION
    x: float = 50.0
    y: float = 55.0
    trace: DecisionTrace | None = None
    outcome: Outcome = Outcome.NONE
    epoch: int = 0

    @property
    def in_town(self) -> bool:
        return self.location == NEUTRAL_LOCATION

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.NONE

    @property
    def days_survived(self) -> int:
        """Days to report on the end screen.

        Infection freezes the day and counts it; otherwise only completed
        safe days count, so victory on day 101 reports 100.
        """
        if self.outcome is Outcome.INFECTED:
            return self.day
        return self.day - 1

    def summary(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "day": self.day,
            "days_survived": self.days_survived,
            "community_level": self.community_level,
            "agent": self.agent.to_dict(),
        }
