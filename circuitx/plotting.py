"""Node voltage plots of a transient result."""

from __future__ import annotations
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .timedomain.network import Indexing
from .timedomain.simulator import TransientResult


def plot_trajectory(result: TransientResult, indexing: Indexing, path,
                    *, show: bool = False) -> Path:
    """
    Plot every node voltage against time and save the figure.

    Args:
        result: Transient result to plot
        indexing: Indexing of the simulated netlist (gives V1..Vn columns)
        path: Output image file
        show: Also open an interactive window

    Returns:
        Path of the written image
    """
    path = Path(path)
    times = np.asarray(result.times)
    states = np.asarray(result.states)

    fig, ax = plt.subplots(figsize=(10, 6))
    for node in range(1, indexing.max_node + 1):
        idx = indexing.index_of(node)
        ax.plot(times, states[:, idx], linewidth=1.5, label=f"V{node}")

    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Voltage (V)")
    if indexing.max_node > 0:
        ax.legend(loc="best")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    if show:
        plt.show()
    plt.close(fig)
    return path
