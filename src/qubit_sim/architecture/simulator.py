# Shot Simulation Engine
#
# Executes a recorded gate sequence many times and histograms the
# measurement outcomes.
#
# Simulation flow:
#   1. Build |0…0⟩ and imprint the initializations
#   2. Apply every gate before the first measurement ONCE (baseline state);
#      nothing random happens before that point, so all shots share it
#   3. For each shot:
#      a. Clone the baseline
#      b. Walk the remaining sequence: gates advance the clone, measurement
#         markers sample an outcome and collapse the clone
#      c. Count the outcome in the histogram bound to that marker
#   4. Return one histogram per measurement marker, in program order
#
# Parallel shots:
#   - Shots are split across a ThreadPoolExecutor
#   - Each worker owns a spawned random stream (or shares a locked one)
#   - Workers fill private histograms that are merged at the end

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from ..configurations import DEFAULT_CONFIG, SimulatorConfig
from ..core.gate_operator import initialize_state
from ..core.measurement import (
    collapse_to_partial_measurement,
    collapse_to_state,
    sample_measurement,
    sample_partial_measurement,
)
from ..core.random_source import LockedRandomSource, RandomSource, ensure_random_source
from ..core.state_vector import validate_qubit_index, validate_qubit_list, zero_state
from ..primitives.gates import Gate, apply_gate


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class Initialization:
    """
    Single-qubit state α|0⟩ + β|1⟩ to imprint on `qubit` before any gate.

    Attributes
    ----------
    qubit : int
        Qubit index.
    alpha : complex
        Amplitude of |0⟩.
    beta : complex
        Amplitude of |1⟩.
    """
    qubit: int
    alpha: complex
    beta: complex


@dataclass
class Histogram:
    """
    Outcome counts for one measurement marker.

    Attributes
    ----------
    width : int
        Number of qubits the measurement covered; outcomes are `width`-bit.
    counts : Dict[int, int]
        Outcome integer → occurrences.

    Examples
    --------
    >>> hist = Histogram(width=2)
    >>> hist.record(0); hist.record(3); hist.record(3)
    >>> str(hist)
    "{'00': 1, '11': 2}"
    """
    width: int
    counts: Dict[int, int] = field(default_factory=dict)

    def record(self, outcome: int) -> None:
        self.counts[outcome] = self.counts.get(outcome, 0) + 1

    def merge(self, other: "Histogram") -> None:
        if other.width != self.width:
            raise ValueError(f"Cannot merge a {other.width}-bit histogram into a {self.width}-bit one")
        for outcome, count in other.counts.items():
            self.counts[outcome] = self.counts.get(outcome, 0) + count

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_bitstrings(self) -> Dict[str, int]:
        """Counts keyed by zero-padded bitstring, ascending, zeros omitted."""
        return {
            format(outcome, f"0{self.width}b"): count
            for outcome, count in sorted(self.counts.items())
            if count
        }

    def probabilities(self) -> Dict[str, float]:
        total = self.total
        if total == 0:
            return {}
        return {key: count / total for key, count in self.to_bitstrings().items()}

    def most_frequent(self) -> str:
        if not self.counts:
            raise ValueError("Histogram is empty")
        outcome = max(sorted(self.counts), key=self.counts.get)
        return format(outcome, f"0{self.width}b")

    def __str__(self) -> str:
        items = ", ".join(f"'{key}': {count}" for key, count in self.to_bitstrings().items())
        return "{" + items + "}"


# =============================================================================
# SHOT SIMULATOR
# =============================================================================

class ShotSimulator:
    """
    Multi-shot executor for a fixed gate/measurement sequence.

    The gate sequence is treated as immutable and shared by reference across
    shots; only the state vector is cloned per shot.

    Parameters
    ----------
    config : SimulatorConfig, optional
        Tolerances, worker count and verbosity. Defaults to `DEFAULT_CONFIG`.

    Examples
    --------
    >>> from qubit_sim.primitives import gates
    >>> sequence = [
    ...     gates.Gate(gates.GateKind.H, targets=(0,), matrix=gates.H),
    ...     gates.Gate(gates.GateKind.CNOT, targets=(1,), controls=(0,), matrix=gates.CNOT),
    ...     gates.measure(),
    ... ]
    >>> sim = ShotSimulator()
    >>> [hist] = sim.run(sequence, [], qubit_count=2, shots=100)
    >>> sorted(hist.to_bitstrings())  # doctest: +SKIP
    ['00', '11']
    """

    def __init__(self, config: Optional[SimulatorConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def run(
        self,
        gates: Sequence[Gate],
        initializations: Sequence[Initialization],
        qubit_count: int,
        shots: int,
        rng: Optional[RandomSource] = None,
        workers: Optional[int] = None,
        verbose: Optional[bool] = None,
    ) -> List[Histogram]:
        """
        Run `shots` trials and histogram every measurement marker.

        Parameters
        ----------
        gates : sequence of Gate
            Program order, measurement markers included.
        initializations : sequence of Initialization
            Applied to |0…0⟩ before any gate.
        qubit_count : int
            Register size n.
        shots : int
            Number of trials (≥ 1).
        rng : RandomSource, optional
            Randomness for the samplers. Defaults to a `NumpyRandomSource`
            seeded from `config.seed`.
        workers : int, optional
            Shot workers; overrides `config.workers`.
        verbose : bool, optional
            Print a run banner; overrides `config.verbose`.

        Returns
        -------
        List[Histogram]
            Histogram i belongs to the i-th measurement marker in program
            order. Each histogram's counts sum to `shots`.
        """
        workers = self.config.workers if workers is None else workers
        verbose = self.config.verbose if verbose is None else verbose
        self._validate(gates, initializations, qubit_count, shots, workers)
        rng = ensure_random_source(rng, seed=self.config.seed)

        start = time.time()
        first_measurement = next(
            (position for position, gate in enumerate(gates) if gate.is_measurement),
            len(gates),
        )
        prefix = gates[:first_measurement]
        remainder = gates[first_measurement:]

        baseline = self.prepare_baseline(prefix, initializations, qubit_count)
        baseline.flags.writeable = False

        workers = min(workers, shots)
        if workers == 1:
            histograms = self._run_shots(baseline, remainder, qubit_count, shots, rng)
        else:
            histograms = self._run_parallel(baseline, remainder, qubit_count, shots, rng, workers)

        if verbose:
            elapsed = time.time() - start
            print(f"\n{'='*60}")
            print("STATE-VECTOR SHOT SIMULATION")
            print(f"{'='*60}")
            print(f"Qubits:           {qubit_count} ({1 << qubit_count} amplitudes)")
            print(f"Prefix gates:     {len(prefix)} (applied once)")
            print(f"Remaining steps:  {len(remainder)} per shot")
            print(f"Measurements:     {len(histograms)}")
            print(f"Shots:            {shots} on {workers} worker(s)")
            print(f"Elapsed:          {elapsed*1e3:.1f} ms")
            for index, hist in enumerate(histograms):
                print(f"  M{index} ({hist.width} qubit(s)): {hist}")
            print(f"{'='*60}")

        return histograms

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def prepare_baseline(
        self,
        prefix: Sequence[Gate],
        initializations: Sequence[Initialization],
        qubit_count: int,
    ) -> np.ndarray:
        """State entering the first measurement: initializations, then the prefix."""
        state = zero_state(qubit_count)
        for init in initializations:
            state = initialize_state(state, init.qubit, init.alpha, init.beta)
        for gate in prefix:
            state = apply_gate(state, gate)
        return state

    def _run_shots(
        self,
        baseline: np.ndarray,
        remainder: Sequence[Gate],
        qubit_count: int,
        shots: int,
        rng: RandomSource,
    ) -> List[Histogram]:
        histograms = self._empty_histograms(remainder, qubit_count)
        atol = self.config.normalization_atol
        for _ in range(shots):
            state = baseline.copy()
            position = 0
            for gate in remainder:
                if not gate.is_measurement:
                    state = apply_gate(state, gate)
                    continue
                if gate.targets:
                    outcome = sample_partial_measurement(state, gate.targets, rng, atol=atol)
                    state = collapse_to_partial_measurement(state, gate.targets, outcome)
                else:
                    outcome = sample_measurement(state, rng, atol=atol)
                    state = collapse_to_state(state, outcome)
                histograms[position].record(outcome)
                position += 1
        return histograms

    def _run_parallel(
        self,
        baseline: np.ndarray,
        remainder: Sequence[Gate],
        qubit_count: int,
        shots: int,
        rng: RandomSource,
        workers: int,
    ) -> List[Histogram]:
        spawn = getattr(rng, "spawn", None)
        if callable(spawn):
            streams = spawn(workers)
        else:
            shared = LockedRandomSource(rng)
            streams = [shared] * workers

        base, extra = divmod(shots, workers)
        quotas = [base + (1 if index < extra else 0) for index in range(workers)]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(self._run_shots, baseline, remainder, qubit_count, quota, stream)
                for quota, stream in zip(quotas, streams)
            ]
            partials = [future.result() for future in futures]

        histograms = self._empty_histograms(remainder, qubit_count)
        for partial in partials:
            for merged, hist in zip(histograms, partial):
                merged.merge(hist)
        return histograms

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _empty_histograms(remainder: Sequence[Gate], qubit_count: int) -> List[Histogram]:
        return [
            Histogram(width=len(gate.targets) if gate.targets else qubit_count)
            for gate in remainder
            if gate.is_measurement
        ]

    def _validate(self, gates, initializations, qubit_count, shots, workers) -> None:
        if isinstance(qubit_count, bool) or not isinstance(qubit_count, (int, np.integer)):
            raise ValueError(f"Qubit count must be an integer, got {qubit_count!r}")
        if not 1 <= qubit_count <= self.config.max_qubits:
            raise ValueError(
                f"Qubit count must be in 1..{self.config.max_qubits}, got {qubit_count}"
            )
        if isinstance(shots, bool) or not isinstance(shots, (int, np.integer)) or shots < 1:
            raise ValueError(f"Shots must be a positive integer, got {shots!r}")
        if workers < 1:
            raise ValueError(f"Workers must be positive, got {workers}")
        for init in initializations:
            validate_qubit_index(init.qubit, qubit_count)
        for gate in gates:
            validate_qubit_list(gate.qubits, qubit_count)
