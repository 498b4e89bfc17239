"""
Quantum Circuit Builder
=======================

Records gate descriptors, measurement markers and initializations for an
n-qubit register, validating every qubit index up front, and hands the
recorded program to `ShotSimulator`.

USAGE
-----

    >>> qc = QuantumCircuit(2)
    >>> _ = qc.h(0).cnot(0, 1).measure()
    >>> [hist] = qc.run(shots=1000, rng=NumpyRandomSource(seed=1))
    >>> print(hist)                                   # doctest: +SKIP
    {'00': 497, '11': 503}

OPERAND ORDER
-------------

Builder methods take qubits in their natural reading order (control first,
then target). Internally each descriptor lists controls before targets,
which is the most-significant-first order the catalogue matrices assume.
Custom gates use the declared order directly: the first declared qubit is
the most significant bit of the matrix index.

INITIALIZATION
--------------

`initialize(q, α, β)` is only allowed while no gate has touched qubit q;
the builder tracks which qubits have been modified.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..configurations import DEFAULT_CONFIG, SimulatorConfig
from ..core.random_source import RandomSource
from ..core.state_vector import format_amplitudes, validate_qubit_index, validate_qubit_list
from ..core.unitarity import validate_custom_gate
from ..primitives import gates as catalogue
from ..primitives.gates import Gate, GateKind
from ..utils.drawer import draw
from .simulator import Histogram, Initialization, ShotSimulator


class QuantumCircuit:
    """
    Builder for an n-qubit gate/measurement program.

    Parameters
    ----------
    qubit_count : int
        Register size, 1 ≤ n ≤ config.max_qubits.
    config : SimulatorConfig, optional
        Shared settings. Defaults to `DEFAULT_CONFIG`.
    """

    def __init__(self, qubit_count: int, config: Optional[SimulatorConfig] = None):
        self.config = config or DEFAULT_CONFIG
        if isinstance(qubit_count, bool) or not isinstance(qubit_count, (int, np.integer)):
            raise ValueError(f"Qubit count must be an integer, got {qubit_count!r}")
        if not 1 <= qubit_count <= self.config.max_qubits:
            raise ValueError(
                f"Qubit count must be in 1..{self.config.max_qubits}, got {qubit_count}"
            )
        self.qubit_count = int(qubit_count)
        self._gates: List[Gate] = []
        self._initializations: List[Initialization] = []
        self._modified = [False] * self.qubit_count

    @property
    def gates(self) -> Tuple[Gate, ...]:
        return tuple(self._gates)

    @property
    def initializations(self) -> Tuple[Initialization, ...]:
        return tuple(self._initializations)

    def __len__(self) -> int:
        return len(self._gates)

    def __repr__(self) -> str:
        return f"QuantumCircuit(qubits={self.qubit_count}, gates={len(self._gates)})"

    # -------------------------------------------------------------------------
    # Recording
    # -------------------------------------------------------------------------

    def _append(self, kind, matrix, targets, controls=(), params=()) -> "QuantumCircuit":
        validate_qubit_list(tuple(controls) + tuple(targets), self.qubit_count)
        gate = Gate(kind, targets=tuple(targets), controls=tuple(controls),
                    matrix=matrix, params=tuple(params))
        self._gates.append(gate)
        for qubit in gate.qubits:
            self._modified[qubit] = True
        return self

    def initialize(self, qubit: int, alpha: complex, beta: complex) -> "QuantumCircuit":
        """
        Prepare `qubit` in α|0⟩ + β|1⟩ before the program runs.

        Raises
        ------
        ValueError
            If the qubit has already been touched by a gate, or
            |α|² + |β|² differs from 1.
        """
        qubit = validate_qubit_index(qubit, self.qubit_count)
        if self._modified[qubit]:
            raise ValueError(
                f"Qubit {qubit} has already been modified by a gate and cannot be initialized"
            )
        norm = abs(alpha) ** 2 + abs(beta) ** 2
        if not np.isclose(norm, 1.0, rtol=0.0, atol=self.config.initialization_atol):
            raise ValueError(f"|alpha|^2 + |beta|^2 must equal 1, got {norm}")
        self._initializations = [i for i in self._initializations if i.qubit != qubit]
        self._initializations.append(Initialization(qubit, complex(alpha), complex(beta)))
        return self

    def i(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.I, catalogue.I, (qubit,))

    def h(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.H, catalogue.H, (qubit,))

    def x(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.X, catalogue.X, (qubit,))

    def y(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.Y, catalogue.Y, (qubit,))

    def z(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.Z, catalogue.Z, (qubit,))

    def s(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.S, catalogue.S, (qubit,))

    def sdg(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.SDG, catalogue.SDG, (qubit,))

    def t(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.T, catalogue.T, (qubit,))

    def tdg(self, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.TDG, catalogue.TDG, (qubit,))

    def rx(self, theta: float, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.RX, catalogue.rx(theta), (qubit,), params=(theta,))

    def ry(self, theta: float, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.RY, catalogue.ry(theta), (qubit,), params=(theta,))

    def rz(self, theta: float, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.RZ, catalogue.rz(theta), (qubit,), params=(theta,))

    def u3(self, theta: float, phi: float, lam: float, qubit: int) -> "QuantumCircuit":
        return self._append(GateKind.U3, catalogue.u3(theta, phi, lam), (qubit,),
                            params=(theta, phi, lam))

    def cnot(self, control: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.CNOT, catalogue.CNOT, (target,), (control,))

    cx = cnot

    def cy(self, control: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.CY, catalogue.CY, (target,), (control,))

    def cz(self, control: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.CZ, catalogue.CZ, (target,), (control,))

    def ch(self, control: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.CH, catalogue.CH, (target,), (control,))

    def crx(self, theta: float, control: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.CRX, catalogue.controlled(catalogue.rx(theta)),
                            (target,), (control,), params=(theta,))

    def cry(self, theta: float, control: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.CRY, catalogue.controlled(catalogue.ry(theta)),
                            (target,), (control,), params=(theta,))

    def crz(self, theta: float, control: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.CRZ, catalogue.controlled(catalogue.rz(theta)),
                            (target,), (control,), params=(theta,))

    def swap(self, first: int, second: int) -> "QuantumCircuit":
        return self._append(GateKind.SWAP, catalogue.SWAP, (first, second))

    def toffoli(self, control1: int, control2: int, target: int) -> "QuantumCircuit":
        return self._append(GateKind.TOFFOLI, catalogue.TOFFOLI, (target,), (control1, control2))

    ccx = toffoli

    def fredkin(self, control: int, target1: int, target2: int) -> "QuantumCircuit":
        return self._append(GateKind.FREDKIN, catalogue.FREDKIN, (target1, target2), (control,))

    cswap = fredkin

    def custom(self, matrix, qubits: Sequence[int]) -> "QuantumCircuit":
        """
        Apply an arbitrary unitary on 1-4 qubits.

        `qubits[0]` is the most significant bit of the matrix index.
        """
        qubits = tuple(qubits)
        u = validate_custom_gate(matrix, len(qubits), atol=self.config.unitarity_atol)
        return self._append(GateKind.CUSTOM, u, qubits)

    def measure(self, qubits: Optional[Sequence[int]] = None) -> "QuantumCircuit":
        """
        Measure `qubits` (all qubits when None or empty).

        The outcome of a partial measurement packs qubits[0] into the most
        significant bit.
        """
        qubits = () if qubits is None else tuple(validate_qubit_list(qubits, self.qubit_count))
        self._gates.append(catalogue.measure(qubits))
        return self

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def statevector(self) -> np.ndarray:
        """
        Deterministic state entering the first measurement.

        Without measurements this is the final state of the circuit.
        """
        prefix = []
        for gate in self._gates:
            if gate.is_measurement:
                break
            prefix.append(gate)
        return ShotSimulator(self.config).prepare_baseline(
            prefix, self._initializations, self.qubit_count
        )

    def amplitudes(self) -> str:
        """Text listing of `statevector()` amplitudes."""
        return format_amplitudes(self.statevector(), precision=self.config.amplitude_precision)

    def draw(self) -> str:
        """Text wire diagram of the recorded gates; see `utils.drawer.draw`."""
        return draw(self)

    def run(
        self,
        shots: Optional[int] = None,
        rng: Optional[RandomSource] = None,
        workers: Optional[int] = None,
        verbose: Optional[bool] = None,
    ) -> List[Histogram]:
        """Execute the program `shots` times; see `ShotSimulator.run`."""
        shots = self.config.default_shots if shots is None else shots
        return ShotSimulator(self.config).run(
            self._gates,
            self._initializations,
            self.qubit_count,
            shots,
            rng=rng,
            workers=workers,
            verbose=verbose,
        )

