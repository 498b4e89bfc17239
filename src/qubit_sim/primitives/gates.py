# Gate Primitives
#
# Gate descriptors and the standard gate catalogue.
#
# Single-Qubit Gates:
#   - Identity, Pauli gates (X, Y, Z), Hadamard
#   - Phase gates (S, S†, T, T†)
#   - Rotations (Rx, Ry, Rz) and the general U3 rotation
#
# Multi-Qubit Gates:
#   - Controlled gates (CNOT, CY, CZ, CH, CRx, CRy, CRz)
#   - SWAP, Toffoli (CCX), Fredkin (CSWAP)
#   - Custom unitaries on 1-4 qubits
#
# Measurement:
#   - MEASURE marker with an optional qubit subset (all qubits if empty)
#
# Operand order:
#   Gate.qubits = controls + targets, most significant first. Every
#   catalogue matrix is written with its controls in the high bits, so
#   CNOT acts on [control, target], Toffoli on [c1, c2, target] and
#   Fredkin on [control, t1, t2].
#
# Dispatch:
#   apply_gate(state, gate) routes a descriptor to the core gate operator
#   by its matrix size. There is no per-kind subclassing.

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np
from scipy.linalg import block_diag, expm

from ..core.gate_operator import apply_multi_qubit_gate, apply_single_qubit_gate


# =============================================================================
# STANDARD MATRICES
# =============================================================================

INV_SQRT2 = 1.0 / np.sqrt(2.0)

I = np.eye(2, dtype=np.complex128)
X = np.array([[0, 1], [1, 0]], dtype=np.complex128)
Y = np.array([[0, -1j], [1j, 0]], dtype=np.complex128)
Z = np.array([[1, 0], [0, -1]], dtype=np.complex128)
H = INV_SQRT2 * np.array([[1, 1], [1, -1]], dtype=np.complex128)
S = np.array([[1, 0], [0, 1j]], dtype=np.complex128)
SDG = S.conj().T
T = np.array([[1, 0], [0, np.exp(1j * np.pi / 4)]], dtype=np.complex128)
TDG = T.conj().T


def controlled(u: np.ndarray) -> np.ndarray:
    """
    Controlled version of `u` with the control in the most significant bit.

    C(U) = |0⟩⟨0| ⊗ I + |1⟩⟨1| ⊗ U = diag(I, U)
    """
    u = np.asarray(u, dtype=np.complex128)
    return block_diag(np.eye(u.shape[0]), u).astype(np.complex128)


CNOT = controlled(X)
CY = controlled(Y)
CZ = controlled(Z)
CH = controlled(H)
SWAP = np.array([
    [1, 0, 0, 0],
    [0, 0, 1, 0],
    [0, 1, 0, 0],
    [0, 0, 0, 1],
], dtype=np.complex128)
TOFFOLI = controlled(CNOT)
FREDKIN = controlled(SWAP)


def rx(theta: float) -> np.ndarray:
    """Rotation about X: exp(-iθX/2)."""
    return expm(-0.5j * theta * X)


def ry(theta: float) -> np.ndarray:
    """Rotation about Y: exp(-iθY/2)."""
    return expm(-0.5j * theta * Y)


def rz(theta: float) -> np.ndarray:
    """Rotation about Z: exp(-iθZ/2)."""
    return expm(-0.5j * theta * Z)


def u3(theta: float, phi: float, lam: float) -> np.ndarray:
    """
    General single-qubit rotation.

        U3(θ, φ, λ) = [[cos(θ/2),          -e^{iλ} sin(θ/2)     ],
                       [e^{iφ} sin(θ/2),    e^{i(φ+λ)} cos(θ/2)]]
    """
    c = np.cos(theta / 2)
    s = np.sin(theta / 2)
    return np.array([
        [c, -np.exp(1j * lam) * s],
        [np.exp(1j * phi) * s, np.exp(1j * (phi + lam)) * c],
    ], dtype=np.complex128)


# =============================================================================
# GATE DESCRIPTORS
# =============================================================================

class GateKind(Enum):
    I = "i"
    H = "h"
    X = "x"
    Y = "y"
    Z = "z"
    S = "s"
    SDG = "sdg"
    T = "t"
    TDG = "tdg"
    RX = "rx"
    RY = "ry"
    RZ = "rz"
    U3 = "u3"
    CNOT = "cnot"
    CY = "cy"
    CZ = "cz"
    CH = "ch"
    CRX = "crx"
    CRY = "cry"
    CRZ = "crz"
    SWAP = "swap"
    TOFFOLI = "toffoli"
    FREDKIN = "fredkin"
    CUSTOM = "custom"
    MEASURE = "measure"


@dataclass(frozen=True)
class Gate:
    """
    One step of a circuit: a unitary or a measurement marker.

    Attributes
    ----------
    kind : GateKind
        Which primitive this is. Informational for unitaries (dispatch only
        looks at the matrix), significant for MEASURE.
    targets : Tuple[int, ...]
        Target qubits. For MEASURE, the measured subset (empty = all qubits).
    controls : Tuple[int, ...]
        Control qubits, placed before the targets in the operand order.
    matrix : np.ndarray, optional
        2^k × 2^k matrix over `qubits`; None for MEASURE.
    params : Tuple[float, ...]
        Rotation angles, kept for display.
    """
    kind: GateKind
    targets: Tuple[int, ...]
    controls: Tuple[int, ...] = ()
    matrix: Optional[np.ndarray] = field(default=None, compare=False)
    params: Tuple[float, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "targets", tuple(int(q) for q in self.targets))
        object.__setattr__(self, "controls", tuple(int(q) for q in self.controls))
        if self.matrix is not None:
            # Private read-only copy: descriptors are shared between shots.
            matrix = np.array(self.matrix, dtype=np.complex128)
            matrix.flags.writeable = False
            object.__setattr__(self, "matrix", matrix)

    @property
    def qubits(self) -> Tuple[int, ...]:
        """Operand order for the matrix, most significant first."""
        return self.controls + self.targets

    @property
    def is_measurement(self) -> bool:
        return self.kind is GateKind.MEASURE

    def __repr__(self) -> str:
        args = ", ".join(f"{p:g}" for p in self.params)
        label = f"{self.kind.value}({args})" if args else self.kind.value
        return f"Gate({label} on {list(self.qubits)})"


def measure(qubits: Tuple[int, ...] = ()) -> Gate:
    """Measurement marker; an empty tuple means every qubit."""
    return Gate(GateKind.MEASURE, targets=tuple(qubits))


# =============================================================================
# DISPATCH
# =============================================================================

def apply_gate(state, gate: Gate) -> np.ndarray:
    """
    Apply a unitary descriptor to a state vector.

    A single operand with a 2×2 matrix goes through the pair-update path;
    anything else through the general multi-qubit path.

    Raises
    ------
    ValueError
        For MEASURE markers, which are resolved by the shot simulator.
    """
    if gate.is_measurement or gate.matrix is None:
        raise ValueError(f"{gate!r} carries no matrix and cannot be applied as a unitary")
    qubits = gate.qubits
    if len(qubits) == 1 and np.shape(gate.matrix) == (2, 2):
        return apply_single_qubit_gate(state, gate.matrix, qubits[0])
    return apply_multi_qubit_gate(state, gate.matrix, qubits)
