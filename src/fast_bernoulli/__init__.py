"""Package initialization for fast-bernoulli.

A constant-time Bernoulli sampler that decides whether to keep each event of
a stream with a fixed probability, drawing random numbers only on acceptance.
"""

from fast_bernoulli.errors import InvalidProbabilityError
from fast_bernoulli.random_source import RandomSource, default_random_source
from fast_bernoulli.sampler import MAX_SKIP_COUNT, FastBernoulli, create

__version__ = "0.1.0"
__all__ = [
    "MAX_SKIP_COUNT",
    "FastBernoulli",
    "InvalidProbabilityError",
    "RandomSource",
    "create",
    "default_random_source",
]
