"""logic/decision_flow.py — Per-location yes/no prompt sequence.

A visit walks a location's ordered decisions one prompt at a time::

    AWAITING_PROMPT(0) → AWAITING_PROMPT(1) → … → VISIT_RESOLVED
                                 ↘ RETURN_TO_NEUTRAL

Transition rules, checked in order after recording the answer:

  1. option.returns_to_neutral  → RETURN_TO_NEUTRAL
  2. option.terminates_visit    → VISIT_RESOLVED
  3. another decision follows   → AWAITING_PROMPT(step + 1)
  4. otherwise                  → VISIT_RESOLVED

Routing comes entirely from the option flags in the location table;
nothing here looks at decision or option ids beyond validating them.
All functions are pure and return new ``DecisionTrace`` values.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

from components.locations import Decision, LocationDefinition
from components.session import ChosenOption, DecisionTrace


class FlowState(Enum):
    AWAITING_PROMPT   = auto()
    VISIT_RESOLVED    = auto()
    RETURN_TO_NEUTRAL = auto()


@dataclass(frozen=True)
class FlowStep:
    state: FlowState
    trace: DecisionTrace
    decision: Decision | None = None     # set while AWAITING_PROMPT

    @property
    def resolved(self) -> bool:
        return self.state is FlowState.VISIT_RESOLVED


def begin_visit(location: LocationDefinition) -> FlowStep:
    """Fresh trace at step 0.  A location without prompts resolves at once."""
    trace = DecisionTrace(location_id=location.id)
    return _at_step(location, trace, 0)


def current_decision(location: LocationDefinition,
                     trace: DecisionTrace) -> Decision | None:
    return location.decision_at(trace.step)


def answer(location: LocationDefinition, trace: DecisionTrace,
           decision_id: str, option_id: str) -> FlowStep | None:
    """Apply one answer.  Returns ``None`` for an invalid input.

    Only the prompt currently on screen can be answered; an unknown
    decision id, a decision that is not current, or an unknown option
    leaves *trace* untouched.
    """
    if trace.location_id != location.id:
        return None
    decision = current_decision(location, trace)
    if decision is None or decision.id != decision_id:
        return None
    option = decision.option(option_id)
    if option is None:
        return None

    chosen = ChosenOption(option.id, option.risk_mod, option.uses_precaution)
    recorded = trace.with_choice(decision.id, chosen, trace.step)

    if option.returns_to_neutral:
        return FlowStep(FlowState.RETURN_TO_NEUTRAL, recorded)
    if option.terminates_visit:
        return FlowStep(FlowState.VISIT_RESOLVED, recorded)
    return _at_step(location, recorded, trace.step + 1)


def _at_step(location: LocationDefinition, trace: DecisionTrace,
             step: int) -> FlowStep:
    decision = location.decision_at(step)
    if decision is None:
        return FlowStep(FlowState.VISIT_RESOLVED, trace)
    advanced = DecisionTrace(trace.location_id, step, trace.choices)
    return FlowStep(FlowState.AWAITING_PROMPT, advanced, decision)
