"""
Measurement Sampling and Collapse
=================================

Projective measurement in the computational basis, for the whole register
or for a subset of qubits.

FULL MEASUREMENT
----------------

    P(i) = |amp[i]|² / Σ_j |amp[j]|²

One uniform draw u ∈ [0, 1) picks the first index whose cumulative
probability reaches u. The post-measurement state is the basis state |i⟩
with no residual superposition.

PARTIAL MEASUREMENT
-------------------

For measured qubits m[0..k-1] the outcome is the k-bit value obtained with
the same packing rule as gate operands (m[0] = most significant bit).
Outcome probabilities are the marginals

    P(o) = Σ_{i : extract(i) = o} |amp[i]|²

Collapse keeps only amplitudes consistent with o and divides by √P(o).
Unmeasured qubits keep any entanglement among themselves.

NUMERICAL NOTES
---------------

Σ|amp|² drifts slightly away from 1 after many gates. Probabilities are
normalized by the actual total before sampling, and a `UserWarning` is
raised when the drift exceeds the tolerance. If rounding leaves the final
cumulative value just below the draw, the last outcome with non-zero
probability is returned instead of failing.
"""

import warnings
from typing import Sequence

import numpy as np

from .gate_operator import extract_bits
from .random_source import RandomSource
from .state_vector import as_state, num_qubits, validate_qubit_list


# =============================================================================
# SAMPLING CORE
# =============================================================================

def _normalized(probabilities: np.ndarray, atol: float) -> np.ndarray:
    total = float(np.sum(probabilities))
    if not np.isfinite(total) or total <= 0.0:
        raise ValueError("State vector has zero norm; nothing to measure")
    if abs(total - 1.0) > atol:
        warnings.warn(
            f"Total probability is {total:.12f}, not 1. "
            f"Renormalizing before sampling.",
            UserWarning
        )
    return probabilities / total


def sample_index(probabilities, rng: RandomSource, atol: float = 1e-9) -> int:
    """
    Draw an index from a (possibly slightly unnormalized) distribution.

    Returns the first index whose cumulative probability is ≥ the draw,
    skipping zero-probability entries; falls back to the last index with
    non-zero probability when rounding leaves every cumulative value short.
    Both rules deliberately depart from the plain "first index, else last
    index" scan so an impossible outcome is never reported.
    """
    probs = _normalized(np.asarray(probabilities, dtype=np.float64), atol)
    draw = rng.next_double()
    cumulative = np.cumsum(probs)
    hits = np.flatnonzero((cumulative >= draw) & (probs > 0.0))
    if hits.size:
        return int(hits[0])
    return int(np.flatnonzero(probs > 0.0)[-1])


def outcome_probabilities(state, measured_qubits: Sequence[int]) -> np.ndarray:
    """
    Marginal probability of each k-bit outcome for the measured qubits.

    Entry o is Σ|amp[i]|² over indices whose measured bits pack to o.
    Not normalized.
    """
    psi = as_state(state)
    qubits = _measured(psi, measured_qubits)
    outcomes = extract_bits(np.arange(psi.shape[0]), qubits)
    weights = psi.real ** 2 + psi.imag ** 2
    return np.bincount(outcomes, weights=weights, minlength=1 << len(qubits))


def _measured(psi: np.ndarray, measured_qubits: Sequence[int]):
    if len(measured_qubits) == 0:
        raise ValueError("Partial measurement needs at least one qubit")
    return validate_qubit_list(measured_qubits, num_qubits(psi))


# =============================================================================
# FULL MEASUREMENT
# =============================================================================

def sample_measurement(state, rng: RandomSource, atol: float = 1e-9) -> int:
    """
    Sample a full-register measurement outcome.

    Parameters
    ----------
    state : array_like
        State vector of length 2^n.
    rng : RandomSource
        Source of one uniform draw.
    atol : float
        Normalization drift above which a warning is emitted.

    Returns
    -------
    int
        Basis index in [0, 2^n).
    """
    psi = as_state(state)
    return sample_index(psi.real ** 2 + psi.imag ** 2, rng, atol=atol)


def collapse_to_state(state, outcome: int) -> np.ndarray:
    """Basis state |outcome⟩ of the same size as `state`."""
    psi = as_state(state)
    if not 0 <= outcome < psi.shape[0]:
        raise ValueError(f"Outcome {outcome} out of range for a state of length {psi.shape[0]}")
    collapsed = np.zeros_like(psi)
    collapsed[outcome] = 1.0
    return collapsed


# =============================================================================
# PARTIAL MEASUREMENT
# =============================================================================

def sample_partial_measurement(
    state,
    measured_qubits: Sequence[int],
    rng: RandomSource,
    atol: float = 1e-9,
) -> int:
    """
    Sample the joint outcome of measuring `measured_qubits`.

    Returns
    -------
    int
        k-bit outcome, measured_qubits[0] in the most significant bit.
    """
    return sample_index(outcome_probabilities(state, measured_qubits), rng, atol=atol)


def collapse_to_partial_measurement(
    state,
    measured_qubits: Sequence[int],
    outcome: int,
) -> np.ndarray:
    """
    Project onto the subspace consistent with `outcome` and renormalize.

    Raises
    ------
    ValueError
        If the outcome does not fit in k bits or has zero probability.
    """
    psi = as_state(state)
    qubits = _measured(psi, measured_qubits)
    if not 0 <= outcome < (1 << len(qubits)):
        raise ValueError(f"Outcome {outcome} does not fit in {len(qubits)} bits")

    keep = extract_bits(np.arange(psi.shape[0]), qubits) == outcome
    projected = np.where(keep, psi, 0.0)
    norm = np.sqrt(np.sum(projected.real ** 2 + projected.imag ** 2))
    if norm == 0.0:
        raise ValueError(f"Outcome {outcome} has zero probability; cannot renormalize")
    return projected / norm
