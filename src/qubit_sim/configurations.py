"""
Simulator Configuration
=======================

Dataclass holding the tunable knobs of the simulator. The builder, the
shot orchestrator and the numeric core all read their defaults from here
rather than from scattered module constants.

WHY A SINGLE CONFIG OBJECT?
---------------------------

The state vector has 2^n entries, so the qubit limit is really a memory
limit (2^30 amplitudes × 16 bytes = 16 GiB). Tolerances for unitarity and
normalization drift are numerical choices that should be tuned together.
Keeping them in one place lets a caller do::

    config = SimulatorConfig(max_qubits=20, seed=1234, workers=4)
    qc = QuantumCircuit(3, config=config)

PRESETS
-------

- `DEFAULT_CONFIG`: the settings used when no config is passed.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SimulatorConfig:
    """
    Settings shared by the circuit builder and the shot simulator.

    Attributes
    ----------
    max_qubits : int
        Largest register the builder accepts. Memory grows as 16·2^n bytes.
    default_shots : int
        Shot count used by `QuantumCircuit.run()` when none is given.
    workers : int
        Number of shot workers. 1 runs every shot on the calling thread.
    seed : int, optional
        Seed for the default random source. None draws OS entropy.
    unitarity_atol : float
        Absolute tolerance for U·U† ≈ I when admitting custom gates.
    normalization_atol : float
        Drift of Σ|amp|² away from 1 above which samplers warn.
    initialization_atol : float
        Allowed deviation of |α|² + |β|² from 1 for initializations.
    amplitude_precision : int
        Decimal places used when rendering amplitudes as text.
    verbose : bool
        Print a run banner and timing from the shot simulator.
    """
    max_qubits: int = 30
    default_shots: int = 1024
    workers: int = 1
    seed: Optional[int] = None
    unitarity_atol: float = 1e-10
    normalization_atol: float = 1e-9
    initialization_atol: float = 1e-6
    amplitude_precision: int = 6
    verbose: bool = False

    def __post_init__(self):
        if not 1 <= self.max_qubits <= 30:
            raise ValueError(f"max_qubits must be in 1..30, got {self.max_qubits}")
        if self.default_shots < 1:
            raise ValueError(f"default_shots must be positive, got {self.default_shots}")
        if self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if min(self.unitarity_atol, self.normalization_atol, self.initialization_atol) <= 0:
            raise ValueError("Tolerances must be positive")
        if self.amplitude_precision < 0:
            raise ValueError(
                f"amplitude_precision must be non-negative, got {self.amplitude_precision}"
            )


DEFAULT_CONFIG = SimulatorConfig()
