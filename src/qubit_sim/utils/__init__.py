# Utility Functions
#
# Common utilities used across the simulator.
#
# Submodules:
#   - drawer: text wire diagrams of circuits and gate matrix printing
#   - visualization: matplotlib bar charts of histograms and probabilities
#
# Note: visualization imports matplotlib, so it is not imported here;
# use `from qubit_sim.utils.visualization import plot_histogram`.

from .drawer import draw, format_matrix

__all__ = ["draw", "format_matrix"]
