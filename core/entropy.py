"""core/entropy.py — Injectable sources of uniform randomness.

Everything in the engine that rolls dice takes an *entropy* argument:
any object with a ``random() -> float`` method returning a value in
``[0, 1)``.  ``random.Random`` already satisfies this, so production
code passes one of those (optionally seeded), while tests pass a
``FixedEntropy`` or ``SequenceEntropy`` to pin outcomes exactly.

    from core.entropy import default_entropy, SequenceEntropy
    rng = default_entropy(seed=42)
    rng.random()                      # → 0.639...

    rigged = SequenceEntropy([0.01, 0.99])
    rigged.random()                   # → 0.01
"""

from __future__ import annotations
import random
from typing import Iterable, Protocol


class Entropy(Protocol):
    """Anything that draws a uniform float in ``[0, 1)``."""

    def random(self) -> float: ...


def default_entropy(seed: int | None = None) -> random.Random:
    """Production source.  Unseeded unless *seed* is given."""
    return random.Random(seed)


class FixedEntropy:
    """Always returns the same value.  Counts how often it was asked."""

    def __init__(self, value: float):
        if not 0.0 <= value < 1.0:
            raise ValueError(f"entropy value must be in [0, 1), got {value}")
        self.value = value
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self.value


class SequenceEntropy:
    """Replays a fixed list of draws, cycling when it runs out."""

    def __init__(self, values: Iterable[float]):
        self.values = [float(v) for v in values]
        if not self.values:
            raise ValueError("SequenceEntropy needs at least one value")
        for v in self.values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"entropy value must be in [0, 1), got {v}")
        self.draws = 0

    def random(self) -> float:
        v = self.values[self.draws % len(self.values)]
        self.draws += 1
        return v
