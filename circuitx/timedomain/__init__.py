"""circuitx Time-Domain Simulation Module.

Transient simulation of linear circuits using Modified Nodal Analysis
(MNA) with backward Euler integration.

Components:
    - R, C, L: Basic passive components
    - VSource: DC voltage source

Pipeline:
    netlist -> index_unknowns -> assemble -> simulate_backward_euler
"""

from .network import Netlist, Component, Indexing, index_unknowns, GROUND, NO_UNKNOWN
from .components import R, C, L, VSource, TYPE_TAGS
from .stamps import MNASystem, stamp_component
from .simulator import TransientResult, stamp_all, assemble, simulate_backward_euler, simulate

__all__ = [
    # Netlist building
    "Netlist",
    "Component",
    "Indexing",
    "index_unknowns",
    "GROUND",
    "NO_UNKNOWN",
    # Components
    "R",
    "C",
    "L",
    "VSource",
    "TYPE_TAGS",
    # Assembly
    "MNASystem",
    "stamp_component",
    "stamp_all",
    "assemble",
    # Simulation
    "TransientResult",
    "simulate_backward_euler",
    "simulate",
]
