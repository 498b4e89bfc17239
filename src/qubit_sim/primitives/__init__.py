# Primitives Layer (Level 1)
#
# Gate descriptors consumed by the shot simulator and produced by the
# circuit builder.
#
# Core Primitives:
#   - Gate: immutable descriptor (kind, operands, matrix, parameters)
#   - GateKind: tagged variant over the supported gate kinds
#   - measure(): measurement marker constructor
#   - apply_gate(): pure dispatch onto the core gate operator
#
# Standard matrices (I, X, Y, Z, H, S, T, CNOT, SWAP, TOFFOLI, FREDKIN, ...)
# and parametric factories (rx, ry, rz, u3, controlled) live in `gates`.

from .gates import Gate, GateKind, measure, apply_gate

__all__ = ["Gate", "GateKind", "measure", "apply_gate"]
