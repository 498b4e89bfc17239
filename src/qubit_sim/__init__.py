# Qubit Sim: State-Vector Quantum Circuit Simulator
#
# Simulates small quantum circuits exactly by tracking all 2^n complex
# amplitudes, applying gate matrices, and sampling projective measurements
# with collapse across many shots.
#
# Architecture:
#   Layer 0 (Core): State vectors, gate application, unitarity, measurement
#   Layer 1 (Primitives): Gate descriptors and the standard gate catalogue
#   Layer 2 (Architecture): Circuit builder and multi-shot simulator

__version__ = "0.1.0"

from .configurations import SimulatorConfig, DEFAULT_CONFIG
from .core import (
    QubitIndexOutOfRangeError,
    RandomSource,
    NumpyRandomSource,
    LockedRandomSource,
    is_unitary,
)
from .primitives import Gate, GateKind, apply_gate
from .architecture import Histogram, Initialization, ShotSimulator, QuantumCircuit

__all__ = [
    "__version__",
    "SimulatorConfig",
    "DEFAULT_CONFIG",
    "QubitIndexOutOfRangeError",
    "RandomSource",
    "NumpyRandomSource",
    "LockedRandomSource",
    "is_unitary",
    "Gate",
    "GateKind",
    "apply_gate",
    "Histogram",
    "Initialization",
    "ShotSimulator",
    "QuantumCircuit",
]
