"""Uniform random sources consumed by the sampler."""

import itertools
import random
import time
from typing import Protocol, runtime_checkable

# Distinguishes seeds of generators created within the same clock tick.
_seed_sequence = itertools.count()


@runtime_checkable
class RandomSource(Protocol):
    """Anything producing independent floats uniformly distributed in [0, 1).

    ``random.Random`` and ``random.SystemRandom`` both satisfy this.
    """

    def random(self) -> float: ...


def default_random_source() -> random.Random:
    """Create a fresh generator seeded from the current time.

    Each call returns a new instance, so samplers built without an explicit
    source never share generator state.
    """
    seed = (next(_seed_sequence) << 64) | time.time_ns()
    return random.Random(seed)
