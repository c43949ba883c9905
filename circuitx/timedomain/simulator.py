"""
System assembly and backward Euler transient integration.

Backward Euler applied to G x + C dx/dt = b:

    (G + C/dt) x_{k+1} = b + (C/dt) x_k

The iteration matrix M = G + C/dt does not depend on k, so it is built
and QR-factored once; each step is a matrix-vector product, Q^T rhs and
one triangular solve.
"""

from __future__ import annotations
import logging
import math
import numbers
from typing import NamedTuple, Callable

import jax
import jax.numpy as jnp
from jax import Array
from jax.scipy.linalg import solve_triangular

from ..config import DEFAULT_RESIDUAL_RTOL, SimConfig
from ..errors import IndexConsistencyError, InvalidSimulationConfig, SingularSystem
from .network import Indexing, Netlist
from .stamps import MNASystem, stamp_component

logger = logging.getLogger(__name__)


class TransientResult(NamedTuple):
    """Trajectory produced by the integrator."""
    times: Array     # (k + 1,) time of each state, times[0] = 0
    states: Array    # (k + 1, n) states[k] = x after k steps, states[0] = 0
    cancelled: bool = False  # stopped early by should_stop


def stamp_all(components, indexing: Indexing, *, strict: bool = True) -> MNASystem:
    """
    Fold stamp_component over components into a zero system.

    The cursor starts at indexing.volt_unknowns and must finish at
    indexing.total_unknowns, i.e. the components must be the ones (and
    the order) the indexing was computed from.

    Raises:
        IndexConsistencyError: the pass consumed a different number of
            extra unknowns than the indexing counted
    """
    system = MNASystem.zeros(indexing.total_unknowns)

    cursor = indexing.volt_unknowns
    for comp in components:
        system, cursor = stamp_component(system, comp, indexing, cursor, strict=strict)

    if cursor != indexing.total_unknowns:
        raise IndexConsistencyError(
            f"stamped {cursor - indexing.volt_unknowns} extra unknowns, "
            f"counted {indexing.extra_unknowns}"
        )
    return system


def assemble(netlist: Netlist, *, strict: bool = True) -> MNASystem:
    """
    Stamp every component of the netlist into a fresh MNA system.

    Components are stamped in declaration order; the extra-unknown cursor
    starts right after the node voltages and must end at total_unknowns.

    Args:
        netlist: Circuit to assemble
        strict: Unknown component kinds raise instead of being skipped

    Returns:
        MNASystem of dimension total_unknowns

    Raises:
        InvalidNetlist, UnknownComponentType, InvalidComponentValue,
        IndexConsistencyError
    """
    indexing = netlist.index()
    system = stamp_all(netlist.components, indexing, strict=strict)

    logger.debug("G matrix:\n%s", system.G)
    logger.debug("C matrix:\n%s", system.C)
    logger.debug("b vector:\n%s", system.b)
    return system


def _check_sim_params(dt, steps) -> None:
    if isinstance(dt, bool) or not isinstance(dt, numbers.Real) \
            or not math.isfinite(dt) or dt <= 0:
        raise InvalidSimulationConfig(f"dt must be a finite positive number, got {dt!r}")
    if isinstance(steps, bool) or not isinstance(steps, numbers.Integral) or steps < 0:
        raise InvalidSimulationConfig(f"steps must be a non-negative integer, got {steps!r}")


def _factor(M: Array) -> tuple[Array, Array]:
    """
    QR-factor the iteration matrix.

    Raises SingularSystem when R has a (numerically) zero pivot.
    """
    Q, R = jnp.linalg.qr(M)
    pivots = jnp.abs(jnp.diag(R))
    p_max = float(jnp.max(pivots))
    p_min = float(jnp.min(pivots))
    tol = M.shape[0] * float(jnp.finfo(M.dtype).eps) * p_max
    if not math.isfinite(p_max) or p_max == 0.0 or p_min <= tol:
        raise SingularSystem(
            f"iteration matrix is singular (min pivot {p_min:.3e}, max pivot {p_max:.3e})"
        )
    return Q, R


@jax.jit
def _be_step(Q: Array, R: Array, M: Array, b: Array, C_dt: Array,
             x: Array) -> tuple[Array, Array, Array]:
    """One backward Euler step. Returns (x_next, residual_norm, residual_scale)."""
    rhs = b + C_dt @ x
    x_next = solve_triangular(R, Q.T @ rhs, lower=False)
    residual = jnp.linalg.norm(M @ x_next - rhs)
    scale = jnp.linalg.norm(M) * jnp.linalg.norm(x_next) + jnp.linalg.norm(rhs)
    return x_next, residual, scale


def simulate_backward_euler(
    system: MNASystem,
    dt: float,
    steps: int,
    *,
    rtol: float = DEFAULT_RESIDUAL_RTOL,
    should_stop: Callable[[int, Array], bool] | None = None,
) -> TransientResult:
    """
    Integrate the system from x0 = 0 for `steps` steps of size `dt`.

    Args:
        system: Assembled MNA system
        dt: Time step in seconds (> 0)
        steps: Number of steps (>= 0)
        rtol: Accepted relative residual of each linear solve
        should_stop: Optional hook called as should_stop(k, x_k) after each
            state is recorded; returning True ends the run early

    Returns:
        TransientResult with steps + 1 states (fewer if cancelled)

    Raises:
        InvalidSimulationConfig: dt <= 0 or steps < 0
        SingularSystem: the iteration matrix cannot be solved; the error
            carries the states computed before the failure
    """
    _check_sim_params(dt, steps)

    n = system.size
    x = jnp.zeros(n)
    history = [x]

    def _result(cancelled: bool = False) -> TransientResult:
        states = jnp.stack(history)
        times = jnp.arange(states.shape[0]) * dt
        return TransientResult(times=times, states=states, cancelled=cancelled)

    if should_stop is not None and should_stop(0, x):
        return _result(cancelled=True)

    # nothing to solve: no step requested, or no unknowns
    if steps == 0 or n == 0:
        history.extend(x for _ in range(steps))
        return _result()

    C_dt = system.C / dt
    M = system.G + C_dt
    try:
        Q, R = _factor(M)
    except SingularSystem as err:
        err.trajectory = jnp.stack(history)
        err.step = 0
        raise

    for k in range(steps):
        x_next, residual, scale = _be_step(Q, R, M, system.b, C_dt, x)
        residual = float(residual)
        if not (bool(jnp.all(jnp.isfinite(x_next))) and residual <= rtol * float(scale)):
            raise SingularSystem(
                f"step {k + 1}: linear solve failed (residual {residual:.3e})",
                trajectory=jnp.stack(history),
                step=k + 1,
            )
        x = x_next
        history.append(x)
        if should_stop is not None and should_stop(k + 1, x):
            logger.info("Time simulation stopped after %d of %d steps.", k + 1, steps)
            return _result(cancelled=True)

    logger.info("Time simulation completed: %d steps of %g s.", steps, dt)
    logger.debug("Final state:\n%s", x)
    return _result()


def simulate(netlist: Netlist, config: SimConfig) -> tuple[MNASystem, TransientResult]:
    """
    Assemble a netlist and run the transient analysis described by config.

    Returns:
        (system, result)
    """
    _check_sim_params(config.dt, config.steps)
    system = assemble(netlist, strict=config.strict)
    return system, simulate_backward_euler(system, config.dt, config.steps)
