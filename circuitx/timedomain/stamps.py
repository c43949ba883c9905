"""MNA stamping rules.

The system is
    G x + C dx/dt = b
where x holds the node voltages followed by the extra (branch current)
unknowns. Each component adds its contribution to G, C or b.

Stamps never mutate: every function returns a new MNASystem, and the
next free extra index is passed in and handed back explicitly.
"""

from __future__ import annotations
import logging
import math
from typing import NamedTuple, Callable

import jax.numpy as jnp
from jax import Array

from ..errors import IndexConsistencyError, InvalidComponentValue, UnknownComponentType
from .network import Component, Indexing, EXTRA_UNKNOWN_KINDS

logger = logging.getLogger(__name__)


class MNASystem(NamedTuple):
    """Assembled MNA matrices."""
    G: Array  # (n, n) conductance matrix
    C: Array  # (n, n) dynamic matrix (capacitances, inductances)
    b: Array  # (n,) source vector

    @classmethod
    def zeros(cls, n: int) -> MNASystem:
        return cls(
            G=jnp.zeros((n, n)),
            C=jnp.zeros((n, n)),
            b=jnp.zeros(n),
        )

    @property
    def size(self) -> int:
        return self.b.shape[0]


def _stamp_admittance(M: Array, n1: int, n2: int, y: float) -> Array:
    """Stamp admittance y between unknowns n1 and n2 (negative = ground)."""
    if n1 >= 0:
        M = M.at[n1, n1].add(y)
    if n2 >= 0:
        M = M.at[n2, n2].add(y)
    if n1 >= 0 and n2 >= 0:
        M = M.at[n1, n2].add(-y)
        M = M.at[n2, n1].add(-y)
    return M


def _stamp_branch(G: Array, n1: int, n2: int, extra: int) -> Array:
    """Couple branch-current unknown `extra` to terminals n1 (+) and n2 (-)."""
    if n1 >= 0:
        G = G.at[n1, extra].add(1.0)
        G = G.at[extra, n1].add(1.0)
    if n2 >= 0:
        G = G.at[n2, extra].add(-1.0)
        G = G.at[extra, n2].add(-1.0)
    return G


def _require_positive(comp: Component, unit: str) -> float:
    value = comp.value
    if not math.isfinite(value) or value <= 0:
        raise InvalidComponentValue(
            f"{comp.name}: {comp.kind} value must be a finite positive {unit}, got {value!r}"
        )
    return value


def _stamp_resistor(system: MNASystem, comp: Component, n1: int, n2: int,
                    cursor: int) -> tuple[MNASystem, int]:
    g = 1.0 / _require_positive(comp, "resistance")
    return system._replace(G=_stamp_admittance(system.G, n1, n2, g)), cursor


def _stamp_capacitor(system: MNASystem, comp: Component, n1: int, n2: int,
                     cursor: int) -> tuple[MNASystem, int]:
    cap = _require_positive(comp, "capacitance")
    return system._replace(C=_stamp_admittance(system.C, n1, n2, cap)), cursor


def _stamp_inductor(system: MNASystem, comp: Component, n1: int, n2: int,
                    cursor: int) -> tuple[MNASystem, int]:
    ind = _require_positive(comp, "inductance")
    extra = cursor
    G = _stamp_branch(system.G, n1, n2, extra)
    C = system.C.at[extra, extra].add(ind)
    return system._replace(G=G, C=C), cursor + 1


def _stamp_vsource(system: MNASystem, comp: Component, n1: int, n2: int,
                   cursor: int) -> tuple[MNASystem, int]:
    if not math.isfinite(comp.value):
        raise InvalidComponentValue(
            f"{comp.name}: voltage must be finite, got {comp.value!r}"
        )
    extra = cursor
    G = _stamp_branch(system.G, n1, n2, extra)
    b = system.b.at[extra].add(comp.value)
    return system._replace(G=G, b=b), cursor + 1


StampFn = Callable[[MNASystem, Component, int, int, int], tuple[MNASystem, int]]

STAMPS: dict[str, StampFn] = {
    "R": _stamp_resistor,
    "C": _stamp_capacitor,
    "L": _stamp_inductor,
    "VSource": _stamp_vsource,
}


def stamp_component(
    system: MNASystem,
    comp: Component,
    indexing: Indexing,
    cursor: int,
    *,
    strict: bool = True,
) -> tuple[MNASystem, int]:
    """
    Add one component's contribution to the system.

    Args:
        system: System stamped so far
        comp: Component to stamp
        indexing: Unknown indexing of the netlist
        cursor: Next free extra-unknown index
        strict: Raise on unknown kinds instead of skipping them

    Returns:
        (new_system, next_cursor)

    Raises:
        UnknownComponentType: unknown kind in strict mode
        InvalidComponentValue: value outside the kind's domain
        IndexConsistencyError: cursor outside the extra-unknown range
    """
    stamp = STAMPS.get(comp.kind)
    if stamp is None:
        if strict:
            raise UnknownComponentType(f"{comp.name}: unknown component type {comp.kind!r}")
        logger.warning("Skipping %s: unknown component type %r", comp.name, comp.kind)
        return system, cursor

    if comp.kind in EXTRA_UNKNOWN_KINDS and not (
        indexing.volt_unknowns <= cursor < indexing.total_unknowns
    ):
        raise IndexConsistencyError(
            f"{comp.name}: extra index {cursor} outside "
            f"[{indexing.volt_unknowns}, {indexing.total_unknowns})"
        )

    n1 = indexing.index_of(comp.nodes[0])
    n2 = indexing.index_of(comp.nodes[1])
    return stamp(system, comp, n1, n2, cursor)
