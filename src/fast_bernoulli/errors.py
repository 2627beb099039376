"""Exceptions raised by fast-bernoulli."""


class InvalidProbabilityError(ValueError):
    """Raised when a sampler is constructed with a probability outside [0, 1].

    NaN is rejected as well, since it compares as neither inside nor outside
    the range.
    """

    def __init__(self, probability: float) -> None:
        self.probability = probability
        super().__init__(
            f"Invalid probability {probability!r}: must be between 0.0 and 1.0"
        )
