"""Default configuration values and the simulation configuration record."""

from __future__ import annotations
from typing import NamedTuple

# Relative residual accepted for each backward Euler solve:
# ||M x - rhs|| <= rtol * (||M|| * ||x|| + ||rhs||)
DEFAULT_RESIDUAL_RTOL = 1e-8

# File written next to the netlist by the command line tool
DEFAULT_PLOT_FILENAME = "plot.png"


class SimConfig(NamedTuple):
    """Transient analysis settings."""
    dt: float        # time step in seconds (> 0)
    steps: int       # number of backward Euler steps (>= 0)
    plot: bool = False    # show the plot window (file is written regardless)
    strict: bool = True   # unknown component types are errors, not skips
