"""simulation/controller.py — Top-level game session controller.

Owns the one ``GameSession`` value and is the only thing that replaces
it.  Each public input method runs to completion before returning:

    movement → zone entry → decision prompts → infection roll
             → next day, or game over (infected / survived)

Invalid inputs (unknown ids, moving during a visit, answering the wrong
prompt) are ignored: the session is left exactly as it was and the
reason goes to the ``DevLog``.

    ctl = GameController()
    ctl.move("right")
    ctl.attempt_enter()
    ctl.choose_option("work_from_home", "yes")
    ctl.day                       # → 2

Presentation-only state (advisory text, walking flag) lives on
``ctl.presentation`` and is driven by deferred effects; call
``ctl.tick(now)`` with a monotonic clock in seconds to expire them.
"""

from __future__ import annotations
from dataclasses import dataclass

from components.dev_log import DevLog
from components.locations import Decision
from components.session import GameSession, Outcome
from core.entropy import Entropy, default_entropy
from core.events import (
    AdvisoryShown, DayAdvanced, EventBus, GameWon, PlayerInfected,
    PromptShown, SessionStarted, VisitAbandoned, VisitStarted,
)
from core.tuning import get
from core.zone import ZoneRect, load_zones, locate
from logic import advisories
from logic.agent_generator import generate
from logic.decision_flow import FlowState, FlowStep
from logic.infection import RiskParams, resolve_visit, visit_probability
from logic.locations import LocationTable
from simulation import transitions
from simulation.scheduler import EffectScheduler, ScheduledEffect
from simulation.transitions import SessionSettings, Transition


DIRECTIONS: dict[str, tuple[float, float]] = {
    "up":    (0.0, -1.0),
    "down":  (0.0, 1.0),
    "left":  (-1.0, 0.0),
    "right": (1.0, 0.0),
}


@dataclass
class Presentation:
    """Flags the UI polls.  Never read by game logic."""
    advisory: str | None = None
    walking: bool = False


@dataclass(frozen=True)
class VisitResult:
    location_id: str
    composite_risk_mod: float
    precaution_used: bool
    probability: float
    infected: bool


class GameController:
    def __init__(self, locations: LocationTable | None = None,
                 zones: tuple[ZoneRect, ...] | None = None,
                 entropy: Entropy | None = None,
                 agent_entropy: Entropy | None = None,
                 tip_entropy: Entropy | None = None,
                 params: RiskParams | None = None,
                 settings: SessionSettings | None = None,
                 bus: EventBus | None = None,
                 log: DevLog | None = None):
        self.locations = locations if locations is not None else LocationTable.from_file()
        self.zones = tuple(zones) if zones is not None else load_zones()
        self.entropy = entropy if entropy is not None else default_entropy()
        # Infection rolls are the only draws on self.entropy
        self.agent_entropy = agent_entropy if agent_entropy is not None else default_entropy()
        self.tip_entropy = tip_entropy if tip_entropy is not None else default_entropy()
        self.params = params if params is not None else RiskParams.from_tuning()
        self.settings = settings if settings is not None else SessionSettings.from_tuning()
        self.bus = bus if bus is not None else EventBus()
        self.log = log if log is not None else DevLog()

        self.scheduler = EffectScheduler()
        self.scheduler.register_handler("SHOW_ADVISORY", self._on_show_advisory)
        self.scheduler.register_handler("CLEAR_ADVISORY", self._on_clear_advisory)
        self.scheduler.register_handler("CLEAR_WALK", self._on_clear_walk)

        self.presentation = Presentation()
        self.now: float = 0.0
        self.last_visit: VisitResult | None = None
        self.session: GameSession = self._fresh_session(epoch=0)

    # ═════════════════════════════════════════════════════════════════
    #  Session lifecycle
    # ═════════════════════════════════════════════════════════════════

    def new_session(self) -> GameSession:
        """Reset everything, draw a new agent, back to day 1."""
        self.session = self._fresh_session(epoch=self.session.epoch + 1)
        return self.session

    restart = new_session

    def _fresh_session(self, epoch: int) -> GameSession:
        self.scheduler.cancel_all(new_epoch=epoch)
        self.presentation = Presentation()
        self.last_visit = None
        agent = generate(self.agent_entropy)
        session = transitions.start_session(agent, self.settings, epoch)
        self.log.record("session", "new session", t=self.now, day=1,
                        details={"epoch": epoch, "agent": agent.describe()})
        print(f"[SESSION] New session #{epoch}: {agent.describe()}")
        self.bus.emit(SessionStarted(epoch=epoch, agent=agent.to_dict()))
        return session

    def tick(self, now: float) -> int:
        """Advance the presentation clock and fire due effects."""
        self.now = max(self.now, now)
        return self.scheduler.tick(self.now)

    # ═════════════════════════════════════════════════════════════════
    #  Inputs
    # ═════════════════════════════════════════════════════════════════

    def move(self, direction: str) -> bool:
        """One directional input: a single ``move_step`` in *direction*."""
        vec = DIRECTIONS.get(direction)
        if vec is None:
            return self._ignore("unknown direction", direction=direction)
        step = self.settings.move_step
        return self.move_player(vec[0] * step, vec[1] * step)

    def move_player(self, dx: float, dy: float) -> bool:
        step = self.settings.move_step
        dx = max(-step, min(step, dx))
        dy = max(-step, min(step, dy))
        t = transitions.move(self.session, dx, dy, self.settings)
        if not self._commit(t, dx=dx, dy=dy):
            return False
        self.presentation.walking = True
        self.scheduler.cancel_kind("CLEAR_WALK")
        self.scheduler.post_delta(self.now, float(get("movement", "walk_settle", 0.2)),
                                  "CLEAR_WALK")
        return True

    def attempt_enter(self) -> bool:
        """Confirm input: enter whatever zone the player is standing in."""
        if not self.session.in_town:
            return self._ignore("confirm during visit")
        zone_id = self.zone_under_player()
        if zone_id is None:
            return self._ignore("no zone here", x=self.session.x, y=self.session.y)
        return self.enter_location(zone_id)

    confirm = attempt_enter

    def enter_location(self, location_id: str) -> bool:
        """Enter *location_id* directly (pointer click on its zone)."""
        t = transitions.enter(self.session, location_id, self.locations)
        if not self._commit(t, location=location_id):
            return False
        loc = self.locations.get(location_id)
        self.bus.emit(VisitStarted(location_id=loc.id, label=loc.label))
        return self._follow(t.flow)

    def choose_option(self, decision_id: str, option_id: str) -> bool:
        """Answer the current prompt.  A resolving answer rolls for
        infection and applies the outcome before returning."""
        t = transitions.choose(self.session, decision_id, option_id, self.locations)
        if not self._commit(t, decision=decision_id, option=option_id):
            return False
        return self._follow(t.flow)

    def leave_location(self) -> bool:
        """Back out of a visit in progress.  No day passes."""
        location_id = self.session.location
        t = transitions.leave(self.session, reason="left")
        if not self._commit(t):
            return False
        self.bus.emit(VisitAbandoned(location_id=location_id, reason="left"))
        return True

    # ═════════════════════════════════════════════════════════════════
    #  Queries
    # ═════════════════════════════════════════════════════════════════

    @property
    def day(self) -> int:
        return self.session.day

    @property
    def community_level(self) -> float:
        return self.session.community_level

    @property
    def location(self) -> str:
        return self.session.location

    @property
    def outcome(self) -> Outcome:
        return self.session.outcome

    def zone_under_player(self) -> str | None:
        if not self.session.in_town or self.session.finished:
            return None
        return locate((self.session.x, self.session.y), self.zones)

    def current_prompt(self) -> Decision | None:
        trace = self.session.trace
        if trace is None:
            return None
        loc = self.locations.get(trace.location_id)
        return loc.decision_at(trace.step) if loc else None

    def hint(self) -> str:
        zone_id = self.zone_under_player()
        if zone_id:
            return f"Press ENTER to enter {zone_id.upper()}"
        return "Arrow keys to move • Enter to visit"

    def summary(self) -> dict:
        return self.session.summary()

    # ═════════════════════════════════════════════════════════════════
    #  Internals
    # ═════════════════════════════════════════════════════════════════

    def _commit(self, t: Transition, **details) -> bool:
        if not t.accepted:
            return self._ignore(t.reason, **details)
        self.session = t.session
        return True

    def _ignore(self, reason: str, **details) -> bool:
        self.log.record("input", f"ignored: {reason}", t=self.now,
                        day=self.session.day, details=details or None)
        return False

    def _follow(self, flow: FlowStep | None) -> bool:
        if flow is None:
            return True
        if flow.state is FlowState.AWAITING_PROMPT and flow.decision is not None:
            d = flow.decision
            self.bus.emit(PromptShown(
                location_id=flow.trace.location_id, decision_id=d.id,
                prompt=d.prompt, options=[(o.id, o.label) for o in d.options]))
        elif flow.state is FlowState.RETURN_TO_NEUTRAL:
            self.bus.emit(VisitAbandoned(location_id=flow.trace.location_id,
                                         reason="returned to town"))
        elif flow.state is FlowState.VISIT_RESOLVED:
            self._resolve_visit()
        return True

    def _resolve_visit(self) -> None:
        session = self.session
        trace = session.trace
        if trace is None:
            self.log.record("invariant", "resolve with no active visit",
                            t=self.now, day=session.day)
            print("[SESSION] resolve requested with no active visit — ignored")
            return

        composite = trace.composite_risk_mod
        precaution = trace.precaution_used
        probability = visit_probability(
            trace.location_id, composite, session.community_level,
            session.agent, precaution, self.params)
        infected = resolve_visit(
            trace.location_id, composite, session.community_level,
            session.agent, precaution, self.entropy, self.params)
        self.last_visit = VisitResult(trace.location_id, composite,
                                      precaution, probability, infected)

        t = transitions.apply_visit_result(session, infected, self.settings)
        if not t.accepted:
            self.log.record("invariant", f"visit result rejected: {t.reason}",
                            t=self.now, day=session.day)
            return
        self.session = t.session
        self.log.record("visit", f"{trace.location_id} resolved", t=self.now,
                        day=session.day,
                        details={"composite": composite, "p": probability,
                                 "infected": infected})

        new = self.session
        if new.outcome is Outcome.INFECTED:
            print(f"[SESSION] Infected at {trace.location_id} on day {new.day}")
            self.bus.emit(PlayerInfected(
                day=new.day, location_id=trace.location_id,
                days_survived=new.days_survived, probability=probability))
        elif new.outcome is Outcome.SURVIVED:
            print(f"[SESSION] Survived {new.days_survived} days")
            self.bus.emit(GameWon(day=new.day, days_survived=new.days_survived))
        else:
            self.bus.emit(DayAdvanced(day=new.day,
                                      community_level=new.community_level,
                                      location_id=trace.location_id))
            self._show_advisory(advisories.safe_day_message(new.day),
                                float(get("advisory", "safe_day_duration", 2.0)))
            if advisories.tip_due(new.day):
                self.scheduler.post_delta(
                    self.now, float(get("advisory", "tip_delay", 2.2)),
                    "SHOW_ADVISORY",
                    {"text": advisories.random_tip(self.tip_entropy),
                     "duration": float(get("advisory", "tip_duration", 4.5))})

    # ── Deferred effects (presentation only) ────────────────────────

    def _show_advisory(self, text: str, duration: float) -> None:
        self.presentation.advisory = text
        self.scheduler.cancel_kind("CLEAR_ADVISORY")
        self.scheduler.post_delta(self.now, duration, "CLEAR_ADVISORY", {"text": text})
        self.bus.emit(AdvisoryShown(text=text, duration=duration))

    def _on_show_advisory(self, eff: ScheduledEffect) -> None:
        self._show_advisory(eff.data.get("text", ""), eff.data.get("duration", 2.0))

    def _on_clear_advisory(self, eff: ScheduledEffect) -> None:
        if self.presentation.advisory == eff.data.get("text"):
            self.presentation.advisory = None

    def _on_clear_walk(self, eff: ScheduledEffect) -> None:
        self.presentation.walking = False
