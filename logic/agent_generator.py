"""logic/agent_generator.py — Draw a random AgentProfile.

Every attribute is an independent draw from the supplied entropy
source, so a seeded ``random.Random`` (or a ``SequenceEntropy``)
reproduces the same agent every time.

    from core.entropy import default_entropy
    agent = generate(default_entropy(seed=7))
"""

from __future__ import annotations

from components.agent import AGE_BRACKETS, AgentProfile
from core.entropy import Entropy, default_entropy
from core.tuning import get


def generate(entropy: Entropy | None = None) -> AgentProfile:
    """Return a fully populated profile.  Never fails."""
    rng = entropy if entropy is not None else default_entropy()

    idx = min(int(rng.random() * len(AGE_BRACKETS)), len(AGE_BRACKETS) - 1)
    age = AGE_BRACKETS[idx]

    comorbidities = _draw_comorbidities(rng)
    status, job_type = _draw_employment(rng)
    senior_center = rng.random() < get("agent", "senior_center_chance", 0.02)
    gender = "female" if rng.random() < get("agent", "female_chance", 0.5) else "male"

    return AgentProfile(
        age_bracket=age,
        comorbidities=comorbidities,
        employment_status=status,
        employment_type=job_type,
        gender=gender,
        senior_center=senior_center,
    )


def _draw_comorbidities(rng: Entropy) -> int:
    if rng.random() >= get("agent", "comorbidity_chance", 0.5):
        return 0
    return 1 if rng.random() < get("agent", "single_comorbidity_chance", 0.6) else 2


def _draw_employment(rng: Entropy) -> tuple[str, str | None]:
    roll = rng.random()
    if roll < get("agent", "employed_chance", 0.6):
        essential = rng.random() < get("agent", "essential_chance", 0.3)
        return "employed", "essential" if essential else "nonessential"
    if roll < get("agent", "student_cutoff", 0.75):
        return "student", None
    return "unemployed", None
