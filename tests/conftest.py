"""Shared fixtures for fast-bernoulli tests."""

from collections.abc import Callable, Iterable

import pytest


class ScriptedRandom:
    """A random source that replays a fixed list of draws.

    Running out of draws is a test failure: it means the sampler consumed
    more randomness than the test expected.
    """

    def __init__(self, values: Iterable[float]) -> None:
        self.values = list(values)
        self.draws = 0

    def random(self) -> float:
        assert self.draws < len(self.values), (
            f"Sampler drew more than the {len(self.values)} scripted value(s)"
        )
        value = self.values[self.draws]
        self.draws += 1
        return value


@pytest.fixture
def scripted() -> Callable[..., ScriptedRandom]:
    """Build a scripted random source from the given draws."""

    def build(*values: float) -> ScriptedRandom:
        return ScriptedRandom(values)

    return build
