# Architecture Layer (Level 2)
#
# Program construction and multi-shot execution.
#
# Submodules:
#   - circuit: QuantumCircuit builder (index validation, initializations)
#   - simulator: ShotSimulator, Histogram and Initialization records
#   - examples: Bell-state and GHZ preparation circuits
#
# Key Responsibilities:
#   1. Validating qubit indices before anything touches the state
#   2. Computing the deterministic prefix once per run
#   3. Sampling and collapsing at every measurement marker, per shot
#   4. Aggregating one histogram per measurement marker

from .simulator import Histogram, Initialization, ShotSimulator
from .circuit import QuantumCircuit
from .examples import ghz, phi_minus, phi_plus, psi_minus, psi_plus

__all__ = [
    "Histogram",
    "Initialization",
    "ShotSimulator",
    "QuantumCircuit",
    "phi_plus",
    "phi_minus",
    "psi_plus",
    "psi_minus",
    "ghz",
]
