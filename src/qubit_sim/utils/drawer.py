"""
Text Circuit Diagrams
=====================

Renders a recorded circuit as a wire diagram, one line per qubit with the
most significant qubit on top, and prints gate matrices as text.

LAYOUT
------

Gates are placed left to right in recording order. Each gate goes into the
first column that is free on every wire it spans (from its lowest to its
highest operand), so independent gates share a column and a multi-qubit
gate never overlaps another gate drawn across its span.

    q1 (0): ─────────[X]────[M]──
                      |
    q0 (0): ──[H]─────@─────[M]──

- `[G]`  gate G on that wire
- `@`    control
- `|`    bar joining the operands of a multi-qubit gate
- `[M]`  measurement

Every column is as wide as its widest label so parametric gates such as
`[RZ(0.5)]` keep the wires aligned.

The label after each wire name is the prepared state: `0` by default,
otherwise `1`, `+`, `-` for the matching basis/Hadamard states, `ψ` for
anything else.

Key Functions
-------------
- draw(): Diagram of a QuantumCircuit
- format_matrix(): Gate matrix as aligned text rows
"""

from typing import Dict, List, Sequence

import numpy as np

from ..core.state_vector import format_complex
from ..primitives.gates import Gate, GateKind


WIRE = "─"
CONTROL = "@"
BAR = "|"

_TARGET_LABELS = {
    GateKind.I: "I",
    GateKind.H: "H",
    GateKind.X: "X",
    GateKind.Y: "Y",
    GateKind.Z: "Z",
    GateKind.S: "S",
    GateKind.SDG: "S†",
    GateKind.T: "T",
    GateKind.TDG: "T†",
    GateKind.RX: "RX",
    GateKind.RY: "RY",
    GateKind.RZ: "RZ",
    GateKind.U3: "U3",
    GateKind.CNOT: "X",
    GateKind.CY: "Y",
    GateKind.CZ: "Z",
    GateKind.CH: "H",
    GateKind.CRX: "RX",
    GateKind.CRY: "RY",
    GateKind.CRZ: "RZ",
    GateKind.SWAP: "x",
    GateKind.TOFFOLI: "X",
    GateKind.FREDKIN: "x",
    GateKind.CUSTOM: "U",
    GateKind.MEASURE: "M",
}


# =============================================================================
# LABELS
# =============================================================================

def gate_symbols(gate: Gate, qubit_count: int) -> Dict[int, str]:
    """
    Symbol drawn on each wire the gate touches.

    Controls get `@`, targets the bracketed gate label with its angles.
    A full-register measurement marks every wire.
    """
    label = _TARGET_LABELS[gate.kind]
    if gate.params:
        label += "(" + ",".join(f"{p:g}" for p in gate.params) + ")"
    boxed = f"[{label}]"

    if gate.is_measurement:
        measured = gate.targets or tuple(range(qubit_count))
        return {qubit: boxed for qubit in measured}

    symbols = {qubit: CONTROL for qubit in gate.controls}
    symbols.update({qubit: boxed for qubit in gate.targets})
    return symbols


def initial_label(alpha: complex, beta: complex, atol: float = 1e-9) -> str:
    """Short name of the single-qubit state α|0⟩ + β|1⟩."""
    if abs(beta) <= atol:
        return "0"
    if abs(alpha) <= atol:
        return "1"
    if np.isclose(alpha, beta, atol=atol) and np.isclose(abs(alpha), 2 ** -0.5, atol=atol):
        return "+"
    if np.isclose(alpha, -beta, atol=atol) and np.isclose(abs(alpha), 2 ** -0.5, atol=atol):
        return "-"
    return "ψ"


# =============================================================================
# DIAGRAM
# =============================================================================

def _layout(gates: Sequence[Gate], qubit_count: int):
    """
    Assign every gate a column.

    Returns per-wire {column: symbol}, per-gap {column} of bars (gap g lies
    between wire g and wire g+1), and the number of columns.
    """
    cells: List[Dict[int, str]] = [{} for _ in range(qubit_count)]
    bars: List[set] = [set() for _ in range(max(qubit_count - 1, 0))]
    next_free = [0] * qubit_count
    columns = 0

    for gate in gates:
        symbols = gate_symbols(gate, qubit_count)
        joined = len(symbols) > 1 and not gate.is_measurement
        wires = range(min(symbols), max(symbols) + 1) if joined else sorted(symbols)

        column = max(next_free[wire] for wire in wires)
        for wire in wires:
            cells[wire][column] = symbols.get(wire, BAR)
            next_free[wire] = column + 1
        if joined:
            for gap in range(min(symbols), max(symbols)):
                bars[gap].add(column)
        columns = max(columns, column + 1)

    return cells, bars, columns


def draw(circuit) -> str:
    """
    Wire diagram of a circuit's recorded gates.

    Parameters
    ----------
    circuit : QuantumCircuit
        Any object with `qubit_count`, `gates` and `initializations`.

    Returns
    -------
    str
        One line per qubit (highest index first) with bar lines between
        them; trailing spaces are stripped.
    """
    n = circuit.qubit_count
    cells, bars, columns = _layout(circuit.gates, n)

    widths = [1] * columns
    for row in cells:
        for column, symbol in row.items():
            widths[column] = max(widths[column], len(symbol))

    prepared = {init.qubit: initial_label(init.alpha, init.beta) for init in circuit.initializations}
    prefixes = [f"q{q} ({prepared.get(q, '0')}): " for q in range(n)]
    indent = max(len(prefix) for prefix in prefixes)

    lines = []
    for qubit in reversed(range(n)):
        wire = prefixes[qubit].ljust(indent)
        for column in range(columns):
            symbol = cells[qubit].get(column, WIRE)
            wire += WIRE * 2 + symbol.center(widths[column], WIRE) + WIRE * 2
        lines.append(wire)

        if qubit > 0:
            gap = " " * indent
            for column in range(columns):
                mark = BAR if column in bars[qubit - 1] else " "
                gap += "  " + mark.center(widths[column]) + "  "
            lines.append(gap.rstrip())

    return "\n".join(lines)


# =============================================================================
# MATRICES
# =============================================================================

def format_matrix(matrix, precision: int = 6) -> str:
    """
    Gate matrix as text, one row per line, columns left-aligned.

    Entries use the amplitude formatting rules; zero prints as `0`.

        >>> print(format_matrix(X))                   # doctest: +SKIP
        0  1
        1  0
    """
    arr = np.atleast_2d(np.asarray(matrix, dtype=np.complex128))
    if arr.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix, got shape {arr.shape}")
    entries = [[format_complex(value, precision) or "0" for value in row] for row in arr]
    width = max(len(entry) for row in entries for entry in row)
    return "\n".join("  ".join(entry.ljust(width) for entry in row).rstrip() for row in entries)
