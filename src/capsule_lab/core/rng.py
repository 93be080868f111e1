"""Seedable shuffling for the build search.

The generator never draws from the root stream directly: every attempt
asks for a named child via :meth:`BuildRNG.fork`, so a single attempt can
be replayed from the root seed and its name alone.
"""

from __future__ import annotations

import hashlib
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class BuildRNG:
    """Root or child random stream for build generation.

    Parameters
    ----------
    seed:
        Integer seed.  ``None`` draws one from system entropy, which makes
        the search non-reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is None:
            seed = random.SystemRandom().getrandbits(63)
        self._seed = seed
        self._stream = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def shuffled(self, pool: Sequence[T]) -> list[T]:
        """Uniformly permuted copy of *pool*; the input is not modified."""
        order = list(pool)
        self._stream.shuffle(order)
        return order

    def fork(self, name: str) -> BuildRNG:
        """Child stream keyed on ``(seed, name)``.

        The child depends only on the root seed and *name*, never on how
        much of this stream has been consumed.
        """
        material = f"{self._seed}:{name}".encode()
        return BuildRNG(int.from_bytes(hashlib.sha256(material).digest()[:8], "big"))

    def __repr__(self) -> str:
        return f"BuildRNG(seed={self._seed})"
