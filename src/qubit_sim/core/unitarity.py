"""
Unitarity Check
===============

A physically valid gate U satisfies U·U† = I. User-supplied matrices are
checked here before they are allowed to touch a state vector; a
non-unitary matrix would silently break Σ|amp|² = 1.
"""

import numpy as np


def is_unitary(matrix, atol: float = 1e-10) -> bool:
    """
    True iff `matrix` is square and U·U† equals the identity within `atol`.

    Parameters
    ----------
    matrix : array_like
        Candidate gate matrix.
    atol : float
        Absolute tolerance applied entrywise.

    Examples
    --------
    >>> is_unitary(np.eye(4))
    True
    >>> is_unitary([[1, 0], [0, 2]])
    False
    """
    u = np.asarray(matrix, dtype=np.complex128)
    if u.ndim != 2 or u.shape[0] != u.shape[1] or u.shape[0] == 0:
        return False
    if not np.all(np.isfinite(u)):
        return False
    product = u @ u.conj().T
    return bool(np.allclose(product, np.eye(u.shape[0]), rtol=0.0, atol=atol))


def validate_custom_gate(matrix, qubit_count: int, atol: float = 1e-10) -> np.ndarray:
    """
    Admit a user matrix as a `qubit_count`-qubit gate.

    Raises
    ------
    ValueError
        If the gate spans fewer than 1 or more than 4 qubits, the matrix side
        is not 2^qubit_count, or the matrix is not unitary.
    """
    if not 1 <= qubit_count <= 4:
        raise ValueError(f"Custom gates act on 1 to 4 qubits, got {qubit_count}")
    u = np.asarray(matrix, dtype=np.complex128)
    side = 1 << qubit_count
    if u.shape != (side, side):
        raise ValueError(
            f"A {qubit_count}-qubit gate needs a {side}x{side} matrix, got shape {u.shape}"
        )
    if not is_unitary(u, atol=atol):
        raise ValueError("Custom gate matrix is not unitary")
    return u
