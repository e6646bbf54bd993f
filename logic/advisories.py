"""logic/advisories.py — Short advisory texts shown between days."""

from __future__ import annotations

from core.entropy import Entropy
from core.tuning import get


RESEARCH_TIPS: tuple[str, ...] = (
    "45.4% of infections occur at home when people spend more time "
    "indoors. Household transmission is real.",
    "Being social: 14.3% of infection events without distancing vs 9.9% "
    "with it. Mask and distance cut risk.",
    "At school: 9.6% without distancing vs 7.4% with it. School plus "
    "distancing reduces infection events.",
    "Your age and number of comorbidities define your agent state and "
    "susceptibility.",
    "Contact tracing plus asymptomatic testing outperforms blunt "
    "lockdowns in the Ontario simulation.",
    "Q-learning agents discovered work-from-home as a dominant strategy.",
    "Agent states (age, employment, comorbidities) affect infection "
    "probability.",
)


def safe_day_message(day: int) -> str:
    return f"Day {day} – You stayed safe."


def tip_due(day: int) -> bool:
    every = int(get("advisory", "tip_every", 5))
    return every > 0 and day > 1 and day % every == 0


def random_tip(entropy: Entropy) -> str:
    idx = int(entropy.random() * len(RESEARCH_TIPS))
    return RESEARCH_TIPS[min(idx, len(RESEARCH_TIPS) - 1)]
