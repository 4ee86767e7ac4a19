"""
Seedable randomness as a value.

Engines never touch the global random module. Each state carries an Rng,
and every draw returns (value, next_rng) so a transition stays a pure
function of its inputs and games can be replayed from a seed.
"""

from __future__ import annotations
from dataclasses import dataclass
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Rng:
    """An immutable random generator position."""
    seed: int

    @classmethod
    def from_seed(cls, seed: int | None = None) -> Rng:
        """Create a generator from a seed, or from OS entropy when None."""
        if seed is None:
            seed = random.SystemRandom().getrandbits(64)
        return cls(seed=seed)

    def _generator(self) -> random.Random:
        return random.Random(self.seed)

    def _advance(self, gen: random.Random) -> Rng:
        return Rng(seed=gen.getrandbits(64))

    def random(self) -> tuple[float, Rng]:
        """Float in [0, 1)."""
        gen = self._generator()
        value = gen.random()
        return value, self._advance(gen)

    def uniform(self, low: float, high: float) -> tuple[float, Rng]:
        gen = self._generator()
        value = gen.uniform(low, high)
        return value, self._advance(gen)

    def randrange(self, stop: int) -> tuple[int, Rng]:
        gen = self._generator()
        value = gen.randrange(stop)
        return value, self._advance(gen)

    def choice(self, items: Sequence[T]) -> tuple[T, Rng]:
        gen = self._generator()
        value = gen.choice(items)
        return value, self._advance(gen)

    def sample(self, items: Sequence[T], k: int) -> tuple[list[T], Rng]:
        """Pick k distinct items; k is clamped to the population size."""
        gen = self._generator()
        value = gen.sample(list(items), min(k, len(items)))
        return value, self._advance(gen)
