from __future__ import annotations

import math
import random
from typing import Protocol

from mockprep.config import Settings, get_settings

FALLBACK_MIN = 70
FALLBACK_MAX = 99


class ScoringStrategy(Protocol):
    def sample_score(self, aspect: str) -> int:
        """Return a 0-100 stand-in for an aspect nothing real measured."""
        ...

    def resume_quality(self) -> int:
        ...


class RandomScoring:
    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def sample_score(self, aspect: str) -> int:
        return self._random.randint(FALLBACK_MIN, FALLBACK_MAX)

    def resume_quality(self) -> int:
        return self._random.randint(FALLBACK_MIN, FALLBACK_MAX)


class FixedScoring:
    def __init__(self, value: int = 75, overrides: dict[str, int] | None = None):
        self.value = value
        self.overrides = dict(overrides or {})
        self.calls: list[str] = []

    def sample_score(self, aspect: str) -> int:
        self.calls.append(aspect)
        return self.overrides.get(aspect, self.value)

    def resume_quality(self) -> int:
        self.calls.append("resume_quality")
        return self.overrides.get("resume_quality", self.value)


def get_scoring_strategy(settings: Settings | None = None) -> ScoringStrategy:
    settings = settings or get_settings()
    if settings.scoring_strategy == "fixed":
        return FixedScoring(settings.fixed_score)
    return RandomScoring()


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores; ``round`` would go to even."""
    return math.floor(value + 0.5)
