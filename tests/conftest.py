from __future__ import annotations

import random
from typing import Sequence

import pytest


class ScriptedRandom(random.Random):
    """Returns queued values from `random()`, then `fallback` once they run out."""

    def __init__(self, values: Sequence[float] = (), fallback: float = 0.0) -> None:
        super().__init__(0)
        self._values = list(values)
        self._fallback = fallback

    def random(self) -> float:
        if self._values:
            return self._values.pop(0)
        return self._fallback


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    """Factory for random sources that replay fixed draws."""
    return ScriptedRandom
