"""
Randomness Sources
==================

The samplers need exactly one operation: a uniform double in [0, 1).
Passing the source explicitly (instead of touching a process-wide
generator) makes runs reproducible and lets parallel shot workers each
own an independent stream.

- `RandomSource`: structural protocol, anything with `next_double()`.
- `NumpyRandomSource`: numpy `Generator` seeded from a `SeedSequence`;
  `spawn(n)` derives n independent child streams.
- `LockedRandomSource`: serializes a shared source behind a lock, for
  sources that cannot be spawned.
"""

import threading
from typing import List, Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can draw a uniform double in [0, 1)."""

    def next_double(self) -> float:
        ...


class NumpyRandomSource:
    """
    Random source backed by `numpy.random.Generator` (PCG64).

    Parameters
    ----------
    seed : int or numpy.random.SeedSequence, optional
        Seed material. None draws fresh OS entropy.

    Examples
    --------
    >>> rng = NumpyRandomSource(seed=7)
    >>> 0.0 <= rng.next_double() < 1.0
    True
    """

    def __init__(self, seed=None):
        if isinstance(seed, np.random.SeedSequence):
            self._seed_sequence = seed
        else:
            self._seed_sequence = np.random.SeedSequence(seed)
        self._generator = np.random.default_rng(self._seed_sequence)

    @property
    def seed_sequence(self) -> np.random.SeedSequence:
        return self._seed_sequence

    def next_double(self) -> float:
        return float(self._generator.random())

    def spawn(self, count: int) -> List["NumpyRandomSource"]:
        """Derive `count` statistically independent child sources."""
        if count < 1:
            raise ValueError(f"Spawn count must be positive, got {count}")
        return [NumpyRandomSource(child) for child in self._seed_sequence.spawn(count)]

    def __repr__(self) -> str:
        return f"NumpyRandomSource(entropy={self._seed_sequence.entropy})"


class LockedRandomSource:
    """Wrap a source so concurrent `next_double()` calls are serialized."""

    def __init__(self, source: RandomSource):
        self._source = source
        self._lock = threading.Lock()

    def next_double(self) -> float:
        with self._lock:
            return self._source.next_double()


def ensure_random_source(rng: Optional[RandomSource] = None, seed=None) -> RandomSource:
    """Return `rng` unchanged, or a fresh `NumpyRandomSource(seed)` when None."""
    if rng is None:
        return NumpyRandomSource(seed)
    if not isinstance(rng, RandomSource):
        raise ValueError(f"Random source must provide next_double(), got {type(rng).__name__}")
    return rng
