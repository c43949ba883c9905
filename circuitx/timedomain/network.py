"""Netlist and unknown indexing (immutable/functional style)."""

from __future__ import annotations
import logging
from typing import NamedTuple, TYPE_CHECKING

from ..errors import InvalidNetlist

if TYPE_CHECKING:
    from .stamps import MNASystem

logger = logging.getLogger(__name__)

GROUND = 0
NO_UNKNOWN = -1  # index_of(GROUND)

# Component kinds with a stamping rule
KINDS = ("R", "C", "L", "VSource")

# Kinds whose constitutive relation needs a branch-current unknown
EXTRA_UNKNOWN_KINDS = ("L", "VSource")


class Component(NamedTuple):
    """A two-terminal circuit element."""
    kind: str                # "R", "C", "L", "VSource" (anything else is unknown)
    nodes: tuple[int, int]   # terminal ids, 0 = ground
    value: float             # ohms, farads, henrys or volts
    name: str


class Indexing(NamedTuple):
    """
    Mapping from terminals and current-defining components to unknowns.

    Unknown vector layout:
        [V(1), ..., V(max_node), extra_0, ..., extra_{k-1}]
    where extra_i belongs to the i-th L/VSource in declaration order.
    """
    node_to_idx: tuple[int, ...]   # node_to_idx[t] for t in 0..max_node
    volt_unknowns: int
    extra_unknowns: int
    total_unknowns: int
    extra_names: tuple[str, ...]   # owner of each extra unknown, in order

    @property
    def max_node(self) -> int:
        return len(self.node_to_idx) - 1

    def index_of(self, node: int) -> int:
        """Unknown index of a terminal, NO_UNKNOWN for ground."""
        if node < 0 or node >= len(self.node_to_idx):
            raise InvalidNetlist(
                f"terminal {node} outside 0..{self.max_node}"
            )
        return self.node_to_idx[node]

    def extra_index(self, position: int) -> int:
        """Unknown index of the position-th extra unknown."""
        return self.volt_unknowns + position

    def labels(self) -> tuple[str, ...]:
        """Human readable name for every unknown ("V1", ..., "I(L1)")."""
        volts = tuple(f"V{n}" for n in range(1, self.max_node + 1))
        currents = tuple(f"I({name})" for name in self.extra_names)
        return volts + currents


def index_unknowns(max_node: int, components) -> Indexing:
    """
    Assign unknown indices.

    Terminals 1..max_node take indices 0..max_node-1 whether or not any
    component touches them. Each L/VSource takes the next index after the
    node voltages, in declaration order. Components of unknown kind are
    not checked here.

    Raises:
        InvalidNetlist: max_node < 0, or a component terminal is negative
            or above max_node
    """
    if max_node < 0:
        raise InvalidNetlist(f"max_node must be >= 0, got {max_node}")

    node_to_idx = (NO_UNKNOWN,) + tuple(range(max_node))
    volt_unknowns = max_node

    extra_names = []
    for comp in components:
        if comp.kind not in KINDS:
            # left to the stamper (error or skip)
            continue
        if len(comp.nodes) != 2:
            raise InvalidNetlist(
                f"{comp.name}: expected 2 terminals, got {len(comp.nodes)}"
            )
        for node in comp.nodes:
            if node < 0 or node > max_node:
                raise InvalidNetlist(
                    f"{comp.name}: terminal {node} outside 0..{max_node}"
                )
        if comp.kind in EXTRA_UNKNOWN_KINDS:
            extra_names.append(comp.name)

    extra_unknowns = len(extra_names)
    total_unknowns = volt_unknowns + extra_unknowns

    logger.debug("Volt unknowns: %d", volt_unknowns)
    logger.debug("Extra unknowns: %d", extra_unknowns)
    logger.debug("Total unknowns: %d", total_unknowns)

    return Indexing(
        node_to_idx=node_to_idx,
        volt_unknowns=volt_unknowns,
        extra_unknowns=extra_unknowns,
        total_unknowns=total_unknowns,
        extra_names=tuple(extra_names),
    )


class Netlist(NamedTuple):
    """
    Immutable circuit description.

    Build using functional style:
        net = Netlist()
        net, r1 = R(net, 1, 0, name="R1", value=1000.0)
    """
    components: tuple[Component, ...] = ()
    max_node: int = 0

    @property
    def gnd(self) -> int:
        """Ground terminal id."""
        return GROUND

    def add_component(self, comp: Component) -> tuple[Netlist, Component]:
        """
        Append a component.

        Recognised kinds raise max_node to cover their terminals; unknown
        kinds are kept for the stamper to reject or skip.

        Returns (new_netlist, component).
        """
        max_node = self.max_node
        if comp.kind in KINDS:
            max_node = max(max_node, *comp.nodes)
        new_net = self._replace(components=self.components + (comp,), max_node=max_node)
        return new_net, comp

    def index(self) -> Indexing:
        """Unknown indexing for this netlist."""
        return index_unknowns(self.max_node, self.components)

    def assemble(self, strict: bool = True) -> MNASystem:
        """
        Build the MNA system for this netlist.

        Args:
            strict: unknown component kinds raise instead of being skipped

        Returns:
            MNASystem with G, C and b
        """
        from .simulator import assemble
        return assemble(self, strict=strict)
