"""circuitx - transient simulator for linear circuits.

Circuits are described as components between numbered terminals
(0 is ground). The time-domain solver builds the Modified Nodal
Analysis (MNA) system and integrates it with backward Euler.

Usage:
    from circuitx.timedomain import Netlist, R, C, L, VSource, assemble, simulate_backward_euler
"""

import jax

# All arrays are float64.
jax.config.update("jax_enable_x64", True)

__version__ = "0.1.0"
__all__ = ["timedomain", "__version__"]
