"""
Tests for the QuantumCircuit builder: recording, validation, initialization
tracking, operand ordering, and delegation to the shot simulator.
"""

import numpy as np
import pytest

from qubit_sim.architecture.circuit import QuantumCircuit
from qubit_sim.configurations import SimulatorConfig
from qubit_sim.core.random_source import NumpyRandomSource
from qubit_sim.core.state_vector import QubitIndexOutOfRangeError
from qubit_sim.primitives import gates
from qubit_sim.primitives.gates import GateKind


def basis(index, qubit_count):
    psi = np.zeros(1 << qubit_count, dtype=np.complex128)
    psi[index] = 1
    return psi


def prepared(qubit_count, index):
    """Circuit with X applied to every qubit set in `index`."""
    qc = QuantumCircuit(qubit_count)
    for qubit in range(qubit_count):
        if (index >> qubit) & 1:
            qc.x(qubit)
    return qc


# =============================================================================
# CONSTRUCTION
# =============================================================================

class TestConstruction:

    @pytest.mark.parametrize("qubit_count", [0, -2, 31])
    def test_qubit_count_out_of_range(self, qubit_count):
        with pytest.raises(ValueError):
            QuantumCircuit(qubit_count)

    def test_qubit_count_respects_config_limit(self):
        with pytest.raises(ValueError):
            QuantumCircuit(5, config=SimulatorConfig(max_qubits=4))

    def test_non_integer_qubit_count(self):
        with pytest.raises(ValueError):
            QuantumCircuit(2.0)

    def test_methods_chain(self):
        qc = QuantumCircuit(2)
        assert qc.h(0).cnot(0, 1).measure() is qc
        assert len(qc) == 3
        assert [g.kind for g in qc.gates] == [GateKind.H, GateKind.CNOT, GateKind.MEASURE]

    def test_gates_view_is_immutable(self):
        qc = QuantumCircuit(1).x(0)
        assert isinstance(qc.gates, tuple)
        assert isinstance(qc.initializations, tuple)


# =============================================================================
# OPERAND ORDER AND GATE SEMANTICS
# =============================================================================

class TestOperandOrder:

    def test_controlled_gates_list_control_first(self):
        qc = QuantumCircuit(3).cnot(2, 0).toffoli(0, 1, 2).fredkin(1, 0, 2)
        assert [g.qubits for g in qc.gates] == [(2, 0), (0, 1, 2), (1, 0, 2)]

    def test_bell_statevector(self):
        psi = QuantumCircuit(2).h(0).cnot(0, 1).statevector()
        np.testing.assert_allclose(psi, [1 / np.sqrt(2), 0, 0, 1 / np.sqrt(2)], atol=1e-12)

    @pytest.mark.parametrize("index", range(8))
    def test_toffoli_truth_table(self, index):
        psi = prepared(3, index).toffoli(0, 1, 2).statevector()
        expected = index ^ 0b100 if index & 0b011 == 0b011 else index
        np.testing.assert_allclose(psi, basis(expected, 3))

    @pytest.mark.parametrize("index", range(8))
    def test_fredkin_truth_table(self, index):
        psi = prepared(3, index).fredkin(2, 0, 1).statevector()
        if index & 0b100:
            expected = 0b100 | ((index & 1) << 1) | ((index >> 1) & 1)
        else:
            expected = index
        np.testing.assert_allclose(psi, basis(expected, 3))

    def test_swap(self):
        psi = prepared(3, 0b001).swap(0, 2).statevector()
        np.testing.assert_allclose(psi, basis(0b100, 3))

    def test_aliases(self):
        a = QuantumCircuit(3).h(0).h(1).cx(0, 2).ccx(0, 1, 2).cswap(0, 1, 2).statevector()
        b = QuantumCircuit(3).h(0).h(1).cnot(0, 2).toffoli(0, 1, 2).fredkin(0, 1, 2).statevector()
        np.testing.assert_allclose(a, b)

    def test_controlled_phase_gates(self):
        psi = prepared(2, 0b11).cz(0, 1).statevector()
        np.testing.assert_allclose(psi, -basis(0b11, 2), atol=1e-12)
        psi = prepared(2, 0b01).cy(0, 1).statevector()
        np.testing.assert_allclose(psi, 1j * basis(0b11, 2), atol=1e-12)

    def test_controlled_rotations_respect_control(self):
        off = QuantumCircuit(2).crx(np.pi, 0, 1).statevector()
        np.testing.assert_allclose(off, basis(0, 2), atol=1e-12)
        on = prepared(2, 0b01).crx(np.pi, 0, 1).statevector()
        np.testing.assert_allclose(on, -1j * basis(0b11, 2), atol=1e-12)

    def test_rotation_params_are_recorded(self):
        qc = QuantumCircuit(1).rx(0.25, 0).u3(0.1, 0.2, 0.3, 0)
        assert [g.params for g in qc.gates] == [(0.25,), (0.1, 0.2, 0.3)]

    def test_single_qubit_sequence_matches_matrix_product(self):
        qc = QuantumCircuit(1).h(0).s(0).t(0).y(0).z(0).sdg(0).tdg(0).i(0).ry(0.3, 0).rz(1.1, 0)
        u = (gates.rz(1.1) @ gates.ry(0.3) @ gates.I @ gates.TDG @ gates.SDG
             @ gates.Z @ gates.Y @ gates.T @ gates.S @ gates.H)
        np.testing.assert_allclose(qc.statevector(), u[:, 0], atol=1e-12)


# =============================================================================
# CUSTOM GATES
# =============================================================================

class TestCustomGates:

    def test_custom_cnot_matches_builtin(self):
        a = QuantumCircuit(2).h(0).custom(gates.CNOT, [0, 1]).statevector()
        b = QuantumCircuit(2).h(0).cnot(0, 1).statevector()
        np.testing.assert_allclose(a, b)

    def test_first_declared_qubit_is_most_significant(self):
        # X ⊗ I flips the first declared qubit
        psi = QuantumCircuit(3).custom(np.kron(gates.X, gates.I), [2, 0]).statevector()
        np.testing.assert_allclose(psi, basis(0b100, 3))

    def test_four_qubit_custom_gate(self, random_unitary):
        u = random_unitary(4, seed=6)
        psi = QuantumCircuit(4).custom(u, [3, 2, 1, 0]).statevector()
        np.testing.assert_allclose(psi, u[:, 0], atol=1e-12)

    def test_non_unitary_is_rejected(self):
        with pytest.raises(ValueError, match="not unitary"):
            QuantumCircuit(2).custom(np.ones((4, 4)), [0, 1])

    def test_too_many_qubits(self):
        with pytest.raises(ValueError, match="1 to 4"):
            QuantumCircuit(5).custom(np.eye(32), [0, 1, 2, 3, 4])

    def test_matrix_size_must_match_operands(self):
        with pytest.raises(ValueError):
            QuantumCircuit(3).custom(np.eye(4), [0, 1, 2])


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:

    def test_out_of_range_qubit(self):
        qc = QuantumCircuit(2)
        with pytest.raises(QubitIndexOutOfRangeError):
            qc.h(2)
        with pytest.raises(QubitIndexOutOfRangeError):
            qc.cnot(0, -1)
        with pytest.raises(QubitIndexOutOfRangeError):
            qc.measure([5])
        assert len(qc) == 0

    def test_measure_accepts_numpy_arrays(self):
        qc = QuantumCircuit(3).measure(np.array([0])).measure(np.array([2, 1]))
        assert [g.targets for g in qc.gates] == [(0,), (2, 1)]

    def test_single_qubit_array_is_not_a_full_measurement(self):
        [hist] = QuantumCircuit(3).x(0).measure(np.array([0])).run(shots=4)
        assert hist.width == 1
        assert hist.to_bitstrings() == {"1": 4}

    def test_empty_measure_list_means_every_qubit(self):
        assert QuantumCircuit(2).measure([]).gates[0].targets == ()

    def test_measure_rejects_float_indices(self):
        with pytest.raises(QubitIndexOutOfRangeError):
            QuantumCircuit(2).measure([0.0])

    def test_duplicate_operands(self):
        with pytest.raises(ValueError, match="Duplicate"):
            QuantumCircuit(3).toffoli(0, 0, 1)
        with pytest.raises(ValueError, match="Duplicate"):
            QuantumCircuit(2).measure([1, 1])


# =============================================================================
# INITIALIZATION
# =============================================================================

class TestInitialization:

    def test_initialize_before_gates(self):
        psi = QuantumCircuit(2).initialize(1, 0.6, 0.8).statevector()
        np.testing.assert_allclose(psi, [0.6, 0, 0.8, 0])

    def test_initialize_after_gate_on_same_qubit_fails(self):
        qc = QuantumCircuit(2).h(0)
        with pytest.raises(ValueError, match="already been modified"):
            qc.initialize(0, 1.0, 0.0)

    def test_controls_count_as_modified(self):
        qc = QuantumCircuit(2).cnot(1, 0)
        with pytest.raises(ValueError):
            qc.initialize(1, 0.0, 1.0)

    def test_untouched_qubit_can_still_be_initialized(self):
        qc = QuantumCircuit(2).h(0).initialize(1, 0.0, 1.0)
        assert [i.qubit for i in qc.initializations] == [1]

    def test_measurement_does_not_mark_qubits(self):
        qc = QuantumCircuit(1).measure()
        qc.initialize(0, 0.0, 1.0)
        [hist] = qc.run(shots=5)
        assert hist.to_bitstrings() == {"1": 5}

    def test_reinitializing_replaces_previous_record(self):
        qc = QuantumCircuit(1).initialize(0, 1.0, 0.0).initialize(0, 0.0, 1.0)
        assert len(qc.initializations) == 1
        np.testing.assert_allclose(qc.statevector(), [0, 1])

    def test_unnormalized_amplitudes_are_rejected(self):
        with pytest.raises(ValueError, match="must equal 1"):
            QuantumCircuit(1).initialize(0, 1.0, 1.0)

    def test_initialize_out_of_range(self):
        with pytest.raises(QubitIndexOutOfRangeError):
            QuantumCircuit(1).initialize(1, 1.0, 0.0)


# =============================================================================
# EXECUTION
# =============================================================================

class TestExecution:

    def test_run_uses_default_shots_from_config(self):
        qc = QuantumCircuit(2, config=SimulatorConfig(default_shots=50)).h(0).measure()
        [hist] = qc.run(rng=NumpyRandomSource(seed=1))
        assert hist.total == 50

    def test_run_bell_pair(self):
        [hist] = QuantumCircuit(2).h(0).cnot(0, 1).measure().run(
            shots=1000, rng=NumpyRandomSource(seed=31)
        )
        assert set(hist.to_bitstrings()) <= {"00", "11"}
        assert 400 < hist.counts.get(0, 0) < 600

    def test_statevector_stops_at_first_measurement(self):
        qc = QuantumCircuit(1).h(0).measure().x(0)
        np.testing.assert_allclose(qc.statevector(), [1 / np.sqrt(2)] * 2, atol=1e-12)

    def test_amplitudes_text(self):
        text = QuantumCircuit(2).h(0).cnot(0, 1).amplitudes()
        assert text == "|00⟩: 0.707107\n|11⟩: 0.707107"

    def test_parallel_run(self):
        qc = QuantumCircuit(2, config=SimulatorConfig(workers=2, seed=3)).h(0).cnot(0, 1).measure()
        [hist] = qc.run(shots=300)
        assert hist.total == 300
        assert set(hist.counts) <= {0, 3}
