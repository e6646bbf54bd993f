"""logic/infection.py — Per-visit infection risk model.

Two layers:

``infection_risk()``  pure lookup: base probability for the location
                      (with or without precaution), scaled by community
                      prevalence and the agent's susceptibility, capped.
``resolve_visit()``   the one place the engine rolls for infection.

Base probabilities are the per-location infection-event shares from the
source study (baseline vs. social distancing), scaled to a per-visit
chance.  Home never rolls: household spread is what losing represents,
not a separate check.

All constants travel in a frozen ``RiskParams`` so the functions stay
pure; ``RiskParams.from_tuning()`` picks up ``data/tuning.toml``.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field

from components.agent import AgentProfile
from core.entropy import Entropy
from core.tuning import get


# location → (no precaution, precaution)
DEFAULT_BASE_RISK: dict[str, tuple[float, float]] = {
    "social":   (0.057, 0.040),
    "school":   (0.038, 0.030),
    "work":     (0.048, 0.032),
    "hospital": (0.040, 0.024),
}

# Locations that never produce an independent infection check.
NO_RISK_LOCATIONS = frozenset({"home", "overworld"})


@dataclass(frozen=True)
class RiskParams:
    base: dict[str, tuple[float, float]] = field(
        default_factory=lambda: dict(DEFAULT_BASE_RISK))
    community_scale: float = 0.8
    risk_cap: float = 0.85
    visit_cap: float = 0.95

    @classmethod
    def from_tuning(cls) -> RiskParams:
        base = {}
        for loc, (no_pc, pc) in DEFAULT_BASE_RISK.items():
            sect = f"risk.base.{loc}"
            base[loc] = (float(get(sect, "no_precaution", no_pc)),
                         float(get(sect, "precaution", pc)))
        return cls(
            base=base,
            community_scale=float(get("risk", "community_scale", 0.8)),
            # Both caps must stay strictly below certainty.
            risk_cap=min(float(get("risk", "risk_cap", 0.85)), 0.99),
            visit_cap=min(float(get("risk", "visit_cap", 0.95)), 0.99),
        )


DEFAULT_PARAMS = RiskParams()


def _clamp(v: float, lo: float, hi: float) -> float:
    if math.isnan(v):
        return lo
    return max(lo, min(hi, v))


def infection_risk(location_id: str, uses_precaution: bool,
                   community_level: float, agent: AgentProfile | None,
                   params: RiskParams = DEFAULT_PARAMS) -> float:
    """Probability in ``[0, params.risk_cap]`` of infection on one visit.

    Unknown locations, ``home`` and ``overworld`` are zero-risk.
    """
    if location_id in NO_RISK_LOCATIONS:
        return 0.0
    entry = params.base.get(location_id)
    if entry is None:
        return 0.0

    no_pc, pc = entry
    base = pc if uses_precaution else no_pc
    community = _clamp(community_level, 0.0, 1.0)
    factor = 1.0 + community * params.community_scale

    susceptibility = agent.susceptibility if agent is not None else 1.0
    if not math.isfinite(susceptibility):
        susceptibility = 1.0
    susceptibility = max(0.0, susceptibility)

    return _clamp(base * factor * susceptibility, 0.0, params.risk_cap)


def visit_probability(location_id: str, composite_mod: float,
                      community_level: float, agent: AgentProfile | None,
                      precaution_used: bool,
                      params: RiskParams = DEFAULT_PARAMS) -> float:
    """Final per-visit probability after the composite multiplier."""
    if composite_mod == 0 or location_id == "home":
        return 0.0
    mod = composite_mod if math.isfinite(composite_mod) else 1.0
    risk = infection_risk(location_id, precaution_used, community_level,
                          agent, params)
    return _clamp(risk * max(0.0, mod), 0.0, params.visit_cap)


def resolve_visit(location_id: str, composite_mod: float,
                  community_level: float, agent: AgentProfile | None,
                  precaution_used: bool, entropy: Entropy,
                  params: RiskParams = DEFAULT_PARAMS) -> bool:
    """Roll for infection once.  Returns True if the agent got infected.

    A composite multiplier of exactly 0 (any zero-risk answer) and the
    home location return False without drawing from *entropy*.
    """
    if composite_mod == 0 or location_id == "home":
        return False
    p = visit_probability(location_id, composite_mod, community_level,
                          agent, precaution_used, params)
    return entropy.random() < p
