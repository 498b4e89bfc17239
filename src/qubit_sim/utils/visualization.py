"""
Measurement Visualization
=========================

Bar charts for shot histograms and exact basis-state probabilities.

Key Functions
-------------
- plot_histogram(): Counts (or frequencies) of one measurement marker
- plot_probabilities(): |amp|² of every basis state of a state vector
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

from ..architecture.simulator import Histogram
from ..core.state_vector import as_state, num_qubits


def plot_histogram(
    histogram: Histogram,
    ax: Optional[plt.Axes] = None,
    title: Optional[str] = None,
    normalize: bool = False,
    figsize: Tuple[float, float] = (8, 5),
    color: str = "tab:blue",
) -> plt.Axes:
    """
    Bar chart of measured outcomes, labelled by zero-padded bitstring.

    Parameters
    ----------
    histogram : Histogram
        Counts from `ShotSimulator.run()`.
    ax : plt.Axes, optional
        Axes to draw on. If None, creates a new figure.
    title : str, optional
        Plot title. Auto-generated if None.
    normalize : bool
        Plot frequencies (counts / shots) instead of raw counts.
    figsize : tuple
        Figure size (width, height) in inches, used only for a new figure.
    color : str
        Bar colour.

    Returns
    -------
    plt.Axes
        The axes with the plot
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    data = histogram.probabilities() if normalize else histogram.to_bitstrings()
    labels = list(data.keys())
    heights = list(data.values())

    bars = ax.bar(labels, heights, color=color, edgecolor="black", linewidth=0.5)
    for bar, value in zip(bars, heights):
        text = f"{value:.3f}" if normalize else str(value)
        ax.annotate(text, (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    ha="center", va="bottom", fontsize=9)

    ax.set_xlabel("Outcome", fontsize=12)
    ax.set_ylabel("Frequency" if normalize else "Counts", fontsize=12)
    if title is None:
        title = f"{histogram.width}-qubit measurement - {histogram.total} shots"
    ax.set_title(title, fontsize=14)
    ax.tick_params(axis="x", rotation=45 if len(labels) > 8 else 0)
    ax.grid(True, axis="y", alpha=0.3)
    return ax


def plot_probabilities(
    state,
    ax: Optional[plt.Axes] = None,
    title: Optional[str] = None,
    figsize: Tuple[float, float] = (8, 5),
    color: str = "tab:purple",
) -> plt.Axes:
    """
    Bar chart of |amp|² for every basis state, labelled |b_{n-1}…b_0⟩.

    Returns
    -------
    plt.Axes
        The axes with the plot
    """
    psi = as_state(state)
    n = num_qubits(psi)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    probabilities = psi.real ** 2 + psi.imag ** 2
    labels = [format(index, f"0{n}b") for index in range(psi.shape[0])]
    ax.bar(labels, probabilities, color=color, edgecolor="black", linewidth=0.5)

    ax.set_xlabel("Basis state", fontsize=12)
    ax.set_ylabel("Probability", fontsize=12)
    ax.set_ylim(0, max(1.0, float(np.max(probabilities))) * 1.05)
    if title is None:
        title = f"{n}-qubit state probabilities"
    ax.set_title(title, fontsize=14)
    ax.tick_params(axis="x", rotation=45 if len(labels) > 8 else 0)
    ax.grid(True, axis="y", alpha=0.3)
    return ax
