"""
Shared fixtures: seeded randomness, random states and unitaries, and a
scripted random source for deterministic sampling tests.
"""

import numpy as np
import pytest
from scipy.stats import unitary_group

from qubit_sim.core.random_source import NumpyRandomSource


class ScriptedRandomSource:
    """Returns a fixed sequence of draws, cycling when exhausted."""

    def __init__(self, *draws):
        self.draws = list(draws)
        self.calls = 0

    def next_double(self) -> float:
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return value


@pytest.fixture
def rng():
    return NumpyRandomSource(seed=12345)


@pytest.fixture
def scripted():
    """Factory: scripted(0.1, 0.9) → source yielding 0.1, 0.9, 0.1, ..."""
    return ScriptedRandomSource


@pytest.fixture
def random_state():
    """Factory for normalized random complex state vectors."""
    def make(qubit_count: int, seed: int = 0) -> np.ndarray:
        generator = np.random.default_rng(seed)
        psi = generator.normal(size=1 << qubit_count) + 1j * generator.normal(size=1 << qubit_count)
        return psi / np.linalg.norm(psi)
    return make


@pytest.fixture
def random_unitary():
    """Factory for Haar-random 2^k × 2^k unitaries."""
    def make(qubit_count: int, seed: int = 0) -> np.ndarray:
        return unitary_group.rvs(1 << qubit_count, random_state=seed)
    return make


@pytest.fixture
def bell_state():
    return np.array([1, 0, 0, 1], dtype=np.complex128) / np.sqrt(2)
