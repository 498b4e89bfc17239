"""
Example Circuits
================

Ready-made entangled-state preparations built on `QuantumCircuit`.
None of them measure, so `statevector()` returns the prepared state and
callers append `measure()` themselves when they want shots.

Bell States
-----------
- phi_plus():  (|00⟩ + |11⟩)/√2   H on q0, CNOT q0 → q1
- phi_minus(): (|00⟩ − |11⟩)/√2   phi_plus + Z on q1
- psi_plus():  (|01⟩ + |10⟩)/√2   phi_plus + X on q1
- psi_minus(): (|01⟩ − |10⟩)/√2   psi_plus + Z on q1

GHZ State
---------
- ghz(n):      (|0…0⟩ + |1…1⟩)/√2 H on q0, CNOT q0 → every other qubit
"""

from typing import Optional

from ..configurations import SimulatorConfig
from .circuit import QuantumCircuit


def phi_plus(config: Optional[SimulatorConfig] = None) -> QuantumCircuit:
    return QuantumCircuit(2, config=config).h(0).cnot(0, 1)


def phi_minus(config: Optional[SimulatorConfig] = None) -> QuantumCircuit:
    return phi_plus(config).z(1)


def psi_plus(config: Optional[SimulatorConfig] = None) -> QuantumCircuit:
    return phi_plus(config).x(1)


def psi_minus(config: Optional[SimulatorConfig] = None) -> QuantumCircuit:
    return psi_plus(config).z(1)


def ghz(qubit_count: int = 3, config: Optional[SimulatorConfig] = None) -> QuantumCircuit:
    """
    Greenberger-Horne-Zeilinger state on `qubit_count` qubits.

    Raises
    ------
    ValueError
        If fewer than 2 qubits are requested.
    """
    if qubit_count < 2:
        raise ValueError(f"A GHZ state needs at least 2 qubits, got {qubit_count}")
    circuit = QuantumCircuit(qubit_count, config=config).h(0)
    for target in range(1, qubit_count):
        circuit.cnot(0, target)
    return circuit
