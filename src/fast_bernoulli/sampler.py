"""Constant-time Bernoulli trials driven by geometric skip counts.

Rolling a die for every event is wasteful when the sampling probability is
small. Instead, the sampler draws one uniform number and turns it into a
*skip count*: the number of upcoming trials that will fail before the next
one succeeds. Trials then just count down, and a new skip count is drawn only
after a success.

Why this is statistically sound
-------------------------------

For trials with success probability ``P``, the chance that the next ``n``
trials all fail is ``(1 - P) ** n``. Lay every possible future out on the
interval ``[0, 1)``. The futures where the first trial succeeds take up a
slice of width ``P``; the rest, of width ``1 - P``, have a skip count of at
least one. That remainder splits the same way again, leaving a slice of width
``(1 - P) ** 2`` for skip counts of at least two, and so on::

    skip >= 0:  |--------------------------------------------- (1-P)^0 --|
    skip >= 1:  |              ------------------------------- (1-P)^1 --|
    skip >= 2:  |                         -------------------- (1-P)^2 --|
    skip >= 3:  |                             ^       -------- (1-P)^3 --|
                                              x

A uniform point ``x`` lies in the ``skip >= n`` region exactly when
``(1 - P) ** n > x``, so the skip count it designates is the largest such
``n``::

    floor(log(x) / log(1 - P))

Picking ``x`` at random therefore yields geometrically distributed skip
counts, which is indistinguishable from flipping a coin per trial.

Because trials are independent, a fresh skip count may be drawn at *any*
moment without biasing the outcome. ``multi_trial`` relies on this: when a
batch of ``n`` trials is known to contain a success it just draws a new skip
count, no matter how far ``n`` overshot the old one.
"""

import logging
import math

from fast_bernoulli.errors import InvalidProbabilityError
from fast_bernoulli.random_source import RandomSource, default_random_source

logger = logging.getLogger(__name__)

# Skip counts are unsigned 32-bit quantities.
MAX_SKIP_COUNT = 2**32 - 1


class FastBernoulli:
    """Sample events, each independently with the same probability.

    Calling :meth:`trial` is O(1), and it only touches the random source when
    an event is accepted, so the lower the probability the cheaper sampling
    gets.

    Instances are not thread-safe. Give each thread its own sampler, or guard
    a shared one with a lock.
    """

    def __init__(
        self, probability: float, random_source: RandomSource | None = None
    ) -> None:
        if isinstance(probability, bool) or not isinstance(probability, (int, float)):
            raise TypeError(
                f"probability must be a real number, not {type(probability).__name__}"
            )
        probability = float(probability)
        # Written as a negated range check so that NaN is rejected.
        if not 0.0 <= probability <= 1.0:
            raise InvalidProbabilityError(probability)

        self._probability = probability
        self._random_source = (
            random_source if random_source is not None else default_random_source()
        )
        # Only meaningful for 0 < P < 1, where it is finite and negative.
        self._inverse_log_complement = 0.0
        if 0.0 < probability < 1.0:
            self._inverse_log_complement = 1.0 / math.log1p(-probability)
        self._skip_count = 0
        self._reset_skip_count()

        logger.debug(
            "Created Bernoulli sampler with probability %r (initial skip count %d)",
            probability,
            self._skip_count,
        )

    @property
    def probability(self) -> float:
        """The probability with which events are sampled, as constructed."""
        return self._probability

    @property
    def skip_count(self) -> int:
        """How many events will be rejected before the next one is sampled.

        When :attr:`probability` is 0 this is :data:`MAX_SKIP_COUNT`, which
        should be read as infinity.
        """
        return self._skip_count

    def trial(self) -> bool:
        """Perform one Bernoulli trial, returning True with the configured probability.

        Call this once per event to decide whether to sample it.
        """
        if self._skip_count > 0:
            if self._probability != 0.0:
                self._skip_count -= 1
            return False
        self._reset_skip_count()
        return self._probability != 0.0

    def multi_trial(self, n: int) -> bool:
        """Perform ``n`` Bernoulli trials at once.

        Equivalent to calling :meth:`trial` ``n`` times and returning True if
        any of those calls did, but runs in O(1) time.

        This suits events of differing size. To sample an allocation stream
        per byte, call ``multi_trial(size)`` for each allocation. Reports built
        on such samples should keep the size of each event visible, because
        large events are far more likely to be picked than small ones.
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"n must be an int, not {type(n).__name__}")
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")

        if self._probability == 0.0:
            return False
        # The first success lands on trial skip_count + 1.
        if n <= self._skip_count:
            self._skip_count -= n
            return False
        self._reset_skip_count()
        return True

    def _reset_skip_count(self) -> None:
        if self._probability == 0.0:
            self._skip_count = MAX_SKIP_COUNT
            return
        if self._probability == 1.0:
            self._skip_count = 0
            return

        x = self._random_source.random()
        if x > 0.0:
            skip = math.log(x) * self._inverse_log_complement
        else:
            skip = math.inf
        # Bounds check in floating point; math.floor(inf) raises.
        if skip > MAX_SKIP_COUNT:
            logger.debug(
                "Skip count %r for draw %r exceeds %d, clamping",
                skip,
                x,
                MAX_SKIP_COUNT,
            )
            self._skip_count = MAX_SKIP_COUNT
        else:
            self._skip_count = math.floor(skip)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(probability={self._probability!r}, "
            f"skip_count={self._skip_count})"
        )


def create(
    probability: float, random_source: RandomSource | None = None
) -> FastBernoulli:
    """Construct a sampler that accepts events with ``probability``.

    If ``random_source`` is omitted, a new time-seeded :class:`random.Random`
    is created for this sampler alone.

    Raises :class:`InvalidProbabilityError` if ``probability`` is not within
    ``[0.0, 1.0]``.
    """
    return FastBernoulli(probability, random_source)
