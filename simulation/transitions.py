"""simulation/transitions.py — Pure session transitions.

Every function takes the current ``GameSession`` plus one input and
returns a ``Transition``: the next session value, whether the input was
accepted, and a short reason when it was not.  A rejected input always
hands back the *same* session object, so callers can never observe a
half-applied change.

The only randomness in a visit (the infection roll) happens outside
this module; ``apply_visit_result`` just receives its boolean.
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from components.agent import AgentProfile
from components.locations import NEUTRAL_LOCATION
from components.session import GameSession, Outcome
from core.tuning import get
from logic import decision_flow
from logic.decision_flow import FlowState, FlowStep
from logic.locations import LocationTable


@dataclass(frozen=True)
class SessionSettings:
    initial_community_level: float = 0.05
    community_growth: float = 0.04
    goal_days: int = 100
    start_x: float = 50.0
    start_y: float = 55.0
    move_step: float = 3.0
    min_x: float = 2.0
    max_x: float = 98.0
    min_y: float = 5.0
    max_y: float = 95.0

    @classmethod
    def from_tuning(cls) -> SessionSettings:
        return cls(
            initial_community_level=float(get("session", "initial_community_level", 0.05)),
            community_growth=float(get("session", "community_growth", 0.04)),
            goal_days=int(get("session", "goal_days", 100)),
            start_x=float(get("session", "start_x", 50.0)),
            start_y=float(get("session", "start_y", 55.0)),
            move_step=float(get("movement", "step", 3.0)),
            min_x=float(get("movement", "min_x", 2.0)),
            max_x=float(get("movement", "max_x", 98.0)),
            min_y=float(get("movement", "min_y", 5.0)),
            max_y=float(get("movement", "max_y", 95.0)),
        )


@dataclass(frozen=True)
class Transition:
    session: GameSession
    accepted: bool
    reason: str = ""
    flow: FlowStep | None = None


def _reject(session: GameSession, reason: str) -> Transition:
    return Transition(session, False, reason)


# ── Session lifecycle ────────────────────────────────────────────────

def start_session(agent: AgentProfile, settings: SessionSettings,
                  epoch: int = 0) -> GameSession:
    return GameSession(
        agent=agent,
        day=1,
        community_level=settings.initial_community_level,
        location=NEUTRAL_LOCATION,
        x=settings.start_x,
        y=settings.start_y,
        trace=None,
        outcome=Outcome.NONE,
        epoch=epoch,
    )


# ── Navigation ───────────────────────────────────────────────────────

def move(session: GameSession, dx: float, dy: float,
         settings: SessionSettings) -> Transition:
    """Translate by (dx, dy), clamped to the map bounds."""
    if session.finished:
        return _reject(session, "game over")
    if not session.in_town or session.trace is not None:
        return _reject(session, "visit in progress")
    x = min(settings.max_x, max(settings.min_x, session.x + dx))
    y = min(settings.max_y, max(settings.min_y, session.y + dy))
    return Transition(replace(session, x=x, y=y), True)


def enter(session: GameSession, location_id: str | None,
          locations: LocationTable) -> Transition:
    """Start a visit at *location_id* with a fresh trace."""
    if session.finished:
        return _reject(session, "game over")
    if not session.in_town:
        return _reject(session, "visit in progress")
    if not location_id:
        return _reject(session, "no zone here")
    loc = locations.get(location_id)
    if loc is None or loc.id == NEUTRAL_LOCATION:
        return _reject(session, f"unknown location {location_id!r}")

    flow = decision_flow.begin_visit(loc)
    nxt = replace(session, location=loc.id, trace=flow.trace)
    return Transition(nxt, True, flow=flow)


def leave(session: GameSession, reason: str = "left") -> Transition:
    """Drop the visit in progress and go back to town.  No day passes."""
    if session.finished:
        return _reject(session, "game over")
    if session.in_town and session.trace is None:
        return _reject(session, "not visiting")
    return Transition(
        replace(session, location=NEUTRAL_LOCATION, trace=None), True, reason)


# ── Decisions ────────────────────────────────────────────────────────

def choose(session: GameSession, decision_id: str, option_id: str,
           locations: LocationTable) -> Transition:
    """Feed one answer into the decision flow.

    On RETURN_TO_NEUTRAL the trace is cleared here.  On VISIT_RESOLVED
    the trace is kept so the caller can score it before applying
    ``apply_visit_result``.
    """
    if session.finished:
        return _reject(session, "game over")
    trace = session.trace
    if trace is None:
        return _reject(session, "no visit in progress")
    loc = locations.get(trace.location_id)
    if loc is None:
        return _reject(session, f"unknown location {trace.location_id!r}")

    flow = decision_flow.answer(loc, trace, decision_id, option_id)
    if flow is None:
        return _reject(session, f"invalid answer {decision_id}={option_id}")

    if flow.state is FlowState.RETURN_TO_NEUTRAL:
        nxt = replace(session, location=NEUTRAL_LOCATION, trace=None)
        return Transition(nxt, True, "returned to town", flow=flow)
    return Transition(replace(session, trace=flow.trace), True, flow=flow)


def apply_visit_result(session: GameSession, infected: bool,
                       settings: SessionSettings) -> Transition:
    """Close a resolved visit: infection ends the game, otherwise a day
    passes (and passing the goal day wins)."""
    if session.finished:
        return _reject(session, "game over")
    if session.trace is None:
        return _reject(session, "no visit to resolve")

    if infected:
        return Transition(
            replace(session, trace=None, outcome=Outcome.INFECTED), True, "infected")

    growth = max(0.0, settings.community_growth)
    level = min(1.0, session.community_level + growth)
    day = session.day + 1
    outcome = Outcome.SURVIVED if day > settings.goal_days else Outcome.NONE
    nxt = replace(session, day=day, community_level=level,
                  location=NEUTRAL_LOCATION, trace=None, outcome=outcome)
    return Transition(nxt, True, "survived" if outcome is Outcome.SURVIVED else "safe")
