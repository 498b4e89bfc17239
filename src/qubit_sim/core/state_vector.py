"""
State Vector Representation
===========================

An n-qubit register is stored as a flat numpy array of 2^n complex128
amplitudes. This module holds the helpers every other layer relies on:
construction, validation, copying and text/QuTiP export.

BIT-INDEXING CONVENTION
-----------------------

Basis index i encodes the register bit-by-bit, with **qubit q stored in
bit q** (qubit 0 = least significant bit):

    index 6 = 0b110  →  qubit 2 = 1, qubit 1 = 1, qubit 0 = 0

Bitstrings are printed most-significant first, so the label for index 6
in a 3-qubit register is "110".

Every engine operation returns a NEW array. Inputs are never written to,
so a baseline state may be shared read-only between shots.
"""

from typing import List, Optional

import numpy as np


class QubitIndexOutOfRangeError(ValueError):
    """Raised when a qubit index falls outside [0, qubit_count)."""


# =============================================================================
# CONSTRUCTION AND VALIDATION
# =============================================================================

def zero_state(qubit_count: int) -> np.ndarray:
    """
    Build the all-zero basis state |0…0⟩.

    Parameters
    ----------
    qubit_count : int
        Number of qubits n (n ≥ 1).

    Returns
    -------
    np.ndarray
        complex128 array of length 2^n with amplitude 1 at index 0.
    """
    if qubit_count < 1:
        raise ValueError(f"Qubit count must be positive, got {qubit_count}")
    state = np.zeros(1 << qubit_count, dtype=np.complex128)
    state[0] = 1.0
    return state


def as_state(state) -> np.ndarray:
    """Coerce to a 1-D complex128 array whose length is a power of two."""
    arr = np.asarray(state, dtype=np.complex128)
    if arr.ndim != 1:
        raise ValueError(f"State vector must be one-dimensional, got shape {arr.shape}")
    length = arr.shape[0]
    if length == 0 or length & (length - 1):
        raise ValueError(f"State vector length must be a power of 2, got {length}")
    return arr


def num_qubits(state) -> int:
    """Number of qubits n for a vector of length 2^n."""
    return as_state(state).shape[0].bit_length() - 1


def validate_qubit_index(qubit, qubit_count: int) -> int:
    """
    Check that `qubit` addresses a wire of an n-qubit register.

    Returns the index as a plain int.
    """
    if isinstance(qubit, (bool, np.bool_)) or not isinstance(qubit, (int, np.integer)):
        raise QubitIndexOutOfRangeError(f"Qubit index must be an integer, got {qubit!r}")
    if not 0 <= qubit < qubit_count:
        raise QubitIndexOutOfRangeError(
            f"Qubit index {qubit} is out of range for a {qubit_count}-qubit register"
        )
    return int(qubit)


def validate_qubit_list(qubits, qubit_count: int) -> List[int]:
    """Validate every index and reject duplicates within one operation."""
    checked = [validate_qubit_index(q, qubit_count) for q in qubits]
    if len(set(checked)) != len(checked):
        raise ValueError(f"Duplicate qubit indices in {checked}")
    return checked


def clone(state) -> np.ndarray:
    """Independent deep copy of a state vector."""
    return as_state(state).copy()


def total_probability(state) -> float:
    """Σ|amp|², equal to 1 for a normalized state."""
    arr = as_state(state)
    return float(np.sum(arr.real ** 2 + arr.imag ** 2))


# =============================================================================
# TEXT RENDERING
# =============================================================================

def _format_number(value: float, precision: int) -> str:
    text = f"{round(value, precision):.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_complex(value: complex, precision: int = 6) -> str:
    """
    Render a complex number the way amplitude listings print it.

    Only the real part when the imaginary part vanishes, only "<imag>i" when
    the real part vanishes, "<re> + <imag>i" otherwise. Zero renders as "".
    """
    real = round(value.real, precision)
    imag = round(value.imag, precision)
    if real == 0 and imag == 0:
        return ""
    if imag == 0:
        return _format_number(real, precision)
    if real == 0:
        return f"{_format_number(imag, precision)}i"
    return f"{_format_number(real, precision)} + {_format_number(imag, precision)}i"


def format_amplitudes(state, precision: int = 6) -> str:
    """
    One line per non-zero amplitude: ``|b_{n-1}…b_0⟩: <amplitude>``.

    Examples
    --------
    >>> print(format_amplitudes([2**-0.5, 0, 0, 2**-0.5], precision=4))
    |00⟩: 0.7071
    |11⟩: 0.7071
    """
    arr = as_state(state)
    width = num_qubits(arr)
    lines = []
    for index, amplitude in enumerate(arr):
        text = format_complex(complex(amplitude), precision)
        if text:
            lines.append(f"|{index:0{width}b}⟩: {text}")
    return "\n".join(lines)


# =============================================================================
# QUTIP EXPORT
# =============================================================================

def to_qobj(state, qubit_count: Optional[int] = None):
    """
    Export as a QuTiP ket with dims [[2]*n, [1]*n].

    QuTiP orders tensor factors most-significant first, so factor 0 is
    qubit n-1 and the last factor is qubit 0. The amplitude array maps
    across unchanged.
    """
    try:
        from qutip import Qobj
    except ImportError:
        raise ImportError(
            "QuTiP is required for Qobj export. "
            "Install with: pip install qutip"
        )

    arr = as_state(state)
    n = num_qubits(arr)
    if qubit_count is not None and qubit_count != n:
        raise ValueError(f"State holds {n} qubits, not {qubit_count}")
    return Qobj(arr.reshape(-1, 1), dims=[[2] * n, [1] * n])
