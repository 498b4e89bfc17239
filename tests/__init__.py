# Tests for Qubit Sim
#
# Test organization mirrors source structure:
#   - test_core/: State vectors, gate application, unitarity, measurement
#   - test_primitives/: Gate catalogue and descriptor dispatch
#   - test_architecture/: Shot simulator and circuit builder
#   - test_utils/: Plotting helpers
#
# Running tests:
#   pytest tests/
#   pytest tests/test_core/ -v
#   pytest tests/ -k "partial"
