"""Helpers that draw every random decision from one injected source.

All helpers consume exactly one `rng.random()` call so a scripted source
pins outcomes in tests.
"""

from __future__ import annotations

import random
from typing import Sequence, TypeVar


T = TypeVar("T")


def random_offset(rng: random.Random, span: int) -> int:
    """Return an integer in [0, span)."""
    return int(rng.random() * span)


def pick(rng: random.Random, options: Sequence[T]) -> T:
    if not options:
        raise ValueError("cannot pick from an empty sequence")
    return options[random_offset(rng, len(options))]


def roll(rng: random.Random, probability: float) -> bool:
    return rng.random() < probability
