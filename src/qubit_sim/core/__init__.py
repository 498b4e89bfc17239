# Core Layer (Level 0)
#
# Numeric state-vector engine. Pure functions over numpy arrays: every
# operation takes a state vector and returns a new one.
#
# Modules:
#   - state_vector: construction, validation, formatting, QuTiP export
#   - gate_operator: single- and multi-qubit gate application, initialization
#   - unitarity: U·U† = I check for user-supplied gates
#   - measurement: full/partial sampling and collapse
#   - random_source: explicit randomness sources for the samplers
#
# Conventions:
#   - Qubit q lives in bit q of the basis index (qubit 0 = LSB)
#   - Multi-qubit operand lists are most-significant-first

from .state_vector import (
    QubitIndexOutOfRangeError,
    zero_state,
    as_state,
    num_qubits,
    clone,
    total_probability,
    validate_qubit_index,
    validate_qubit_list,
    format_complex,
    format_amplitudes,
    to_qobj,
)
from .gate_operator import (
    extract_bits,
    deposit_bits,
    apply_single_qubit_gate,
    apply_multi_qubit_gate,
    initialize_state,
)
from .unitarity import is_unitary, validate_custom_gate
from .measurement import (
    sample_index,
    outcome_probabilities,
    sample_measurement,
    collapse_to_state,
    sample_partial_measurement,
    collapse_to_partial_measurement,
)
from .random_source import (
    RandomSource,
    NumpyRandomSource,
    LockedRandomSource,
    ensure_random_source,
)

__all__ = [
    "QubitIndexOutOfRangeError",
    "zero_state",
    "as_state",
    "num_qubits",
    "clone",
    "total_probability",
    "validate_qubit_index",
    "validate_qubit_list",
    "format_complex",
    "format_amplitudes",
    "to_qobj",
    "extract_bits",
    "deposit_bits",
    "apply_single_qubit_gate",
    "apply_multi_qubit_gate",
    "initialize_state",
    "is_unitary",
    "validate_custom_gate",
    "sample_index",
    "outcome_probabilities",
    "sample_measurement",
    "collapse_to_state",
    "sample_partial_measurement",
    "collapse_to_partial_measurement",
    "RandomSource",
    "NumpyRandomSource",
    "LockedRandomSource",
    "ensure_random_source",
]
