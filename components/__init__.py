"""components — Engine dataclasses, organised by domain.

Submodules
----------
agent       AgeBracket, AgentProfile, bracket / comorbidity tables
locations   Option, Decision, LocationDefinition
session     GameSession, DecisionTrace, ChosenOption, Outcome
dev_log     DevLog

All public names are re-exported here so callers can write
``from components import GameSession``.
"""

# ── Agent ────────────────────────────────────────────────────────────
from components.agent import (
    AgeBracket, AgentProfile, AGE_BRACKETS, COMORBIDITY_MULT,
    MAX_SUSCEPTIBILITY,
)

# ── Static configuration ─────────────────────────────────────────────
from components.locations import (
    Option, Decision, LocationDefinition, NEUTRAL_LOCATION,
)

# ── Session state ────────────────────────────────────────────────────
from components.session import (
    GameSession, DecisionTrace, ChosenOption, Outcome,
)

# ── Diagnostics ──────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # agent
    "AgeBracket", "AgentProfile", "AGE_BRACKETS", "COMORBIDITY_MULT",
    "MAX_SUSCEPTIBILITY",
    # locations
    "Option", "Decision", "LocationDefinition", "NEUTRAL_LOCATION",
    # session
    "GameSession", "DecisionTrace", "ChosenOption", "Outcome",
    # diagnostics
    "DevLog",
]
