"""
Gate Application
================

Applies unitary matrices to a state vector without ever building the full
2^n × 2^n operator.

SINGLE-QUBIT GATES
------------------

For target qubit t, the basis indices split into pairs (i, j = i | 2^t)
that differ only in bit t. The gate mixes each pair as a 2-vector:

    [amp'[i]]   [U00 U01] [amp[i]]
    [amp'[j]] = [U10 U11] [amp[j]]

Only indices with bit t = 0 are enumerated; their partner is updated
alongside, so no amplitude is visited twice.

MULTI-QUBIT GATES
-----------------

A k-qubit gate acts on an ordered operand list q[0..k-1]. For a basis index
i the k operand bits are packed into a k-bit value with **q[0] as the most
significant bit**:

    extract(i) = Σ_j  bit(i, q[j]) << (k-1-j)

This value selects a matrix column. Writing a row value r back into the
operand bits of i (same bit order) gives the destination index, which
receives matrix[r, extract(i)] · amp[i]. Cost is O(2^n · 2^k).

The gather form used below computes the same sum from the destination side:

    amp'[d] = Σ_c  matrix[extract(d), c] · amp[deposit(clear(d), c)]

QUBIT-ORDER CONVENTION
----------------------

The operand list is always most-significant-first, for every gate kind.
The standard catalogue writes controlled matrices with the control in the
high bit, so a CNOT is applied with operands [control, target].
"""

from typing import Sequence

import numpy as np

from .state_vector import as_state, num_qubits, validate_qubit_index, validate_qubit_list


# =============================================================================
# BIT HELPERS
# =============================================================================

def extract_bits(indices: np.ndarray, qubits: Sequence[int]) -> np.ndarray:
    """
    Pack the bits at `qubits` of every index into a k-bit value.

    qubits[0] lands in the most significant position of the result.
    """
    k = len(qubits)
    packed = np.zeros_like(indices)
    for position, qubit in enumerate(qubits):
        packed |= ((indices >> qubit) & 1) << (k - 1 - position)
    return packed


def deposit_bits(value: int, qubits: Sequence[int]) -> int:
    """Inverse of `extract_bits` for one value: scatter k bits onto `qubits`."""
    k = len(qubits)
    index = 0
    for position, qubit in enumerate(qubits):
        index |= ((value >> (k - 1 - position)) & 1) << qubit
    return index


def _as_matrix(matrix, side: int) -> np.ndarray:
    arr = np.asarray(matrix, dtype=np.complex128)
    if arr.shape != (side, side):
        raise ValueError(f"Gate matrix must be {side}x{side}, got shape {arr.shape}")
    return arr


# =============================================================================
# GATE APPLICATION
# =============================================================================

def apply_single_qubit_gate(state, gate, target_qubit: int) -> np.ndarray:
    """
    Apply a 2×2 matrix to one qubit.

    Parameters
    ----------
    state : array_like
        State vector of length 2^n.
    gate : array_like
        2×2 complex matrix.
    target_qubit : int
        Qubit index (0 = least significant bit).

    Returns
    -------
    np.ndarray
        New state vector; the input is not modified.

    Raises
    ------
    ValueError
        If the state length is not a power of two, the matrix is not 2×2,
        or the qubit index is out of range.
    """
    psi = as_state(state)
    u = _as_matrix(gate, 2)
    target_qubit = validate_qubit_index(target_qubit, num_qubits(psi))

    mask = 1 << target_qubit
    indices = np.arange(psi.shape[0])
    low = indices[(indices & mask) == 0]
    high = low | mask

    a = psi[low]
    b = psi[high]
    out = np.empty_like(psi)
    out[low] = u[0, 0] * a + u[0, 1] * b
    out[high] = u[1, 0] * a + u[1, 1] * b
    return out


def apply_multi_qubit_gate(state, gate, qubits: Sequence[int]) -> np.ndarray:
    """
    Apply a 2^k × 2^k matrix to an ordered list of k qubits.

    Parameters
    ----------
    state : array_like
        State vector of length 2^n.
    gate : array_like
        2^k × 2^k complex matrix.
    qubits : sequence of int
        Operand qubits, most significant first (qubits[0] ↔ matrix MSB).

    Returns
    -------
    np.ndarray
        New state vector; the input is not modified.

    Raises
    ------
    ValueError
        If the state length is not a power of two, the operand list is empty
        or has duplicates, an index is out of range, or the matrix side is
        not 2^k.
    """
    psi = as_state(state)
    n = num_qubits(psi)
    if len(qubits) == 0:
        raise ValueError("Multi-qubit gate needs at least one operand")
    if len(qubits) > n:
        raise ValueError(f"Cannot apply a {len(qubits)}-qubit gate to a {n}-qubit state")
    qubits = validate_qubit_list(qubits, n)
    k = len(qubits)
    u = _as_matrix(gate, 1 << k)

    indices = np.arange(psi.shape[0])
    rows = extract_bits(indices, qubits)
    operand_mask = deposit_bits((1 << k) - 1, qubits)
    cleared = indices & ~operand_mask

    out = np.zeros_like(psi)
    for column in range(1 << k):
        source = cleared | deposit_bits(column, qubits)
        out += u[rows, column] * psi[source]
    return out


def initialize_state(state, target_qubit: int, alpha: complex, beta: complex) -> np.ndarray:
    """
    Imprint the single-qubit state α|0⟩ + β|1⟩ on `target_qubit`.

    The qubit's current basis value is treated as a label: a |0⟩ component
    becomes α|0⟩ + β|1⟩ and a |1⟩ component becomes β|0⟩ − α|1⟩, with the
    amplitudes of all other qubits carried along unchanged.

    The caller must guarantee that no gate has entangled the qubit yet;
    this is not checked here.
    """
    relabel = np.array([[alpha, beta], [beta, -alpha]], dtype=np.complex128)
    return apply_single_qubit_gate(state, relabel, target_qubit)
