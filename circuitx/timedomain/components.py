"""Circuit component factory functions (functional style)."""

from __future__ import annotations

from .network import Netlist, Component

# Netlist file type tags -> component kinds
TYPE_TAGS = {
    "resistor": "R",
    "capacitor": "C",
    "inductor": "L",
    "voltage_source": "VSource",
}


def R(
    net: Netlist,
    node_a: int,
    node_b: int,
    *,
    name: str,
    value: float,
) -> tuple[Netlist, Component]:
    """
    Create a resistor.

    Args:
        net: Netlist to add to
        node_a: First terminal
        node_b: Second terminal
        name: Component name
        value: Resistance in Ohms (> 0)

    Returns:
        (new_netlist, component)

    Example:
        net, r1 = R(net, 1, 2, name="R1", value=1000.0)  # 1 kΩ
    """
    return net.add_component(Component("R", (node_a, node_b), value, name))


def C(
    net: Netlist,
    node_a: int,
    node_b: int,
    *,
    name: str,
    value: float,
) -> tuple[Netlist, Component]:
    """
    Create a capacitor.

    Args:
        net: Netlist to add to
        node_a: First terminal
        node_b: Second terminal
        name: Component name
        value: Capacitance in Farads (> 0)

    Returns:
        (new_netlist, component)

    Example:
        net, c1 = C(net, 2, net.gnd, name="C1", value=1e-6)  # 1 µF
    """
    return net.add_component(Component("C", (node_a, node_b), value, name))


def L(
    net: Netlist,
    node_a: int,
    node_b: int,
    *,
    name: str,
    value: float,
) -> tuple[Netlist, Component]:
    """
    Create an inductor. Adds one branch-current unknown.

    Args:
        net: Netlist to add to
        node_a: First terminal
        node_b: Second terminal
        name: Component name
        value: Inductance in Henrys (> 0)

    Returns:
        (new_netlist, component)
    """
    return net.add_component(Component("L", (node_a, node_b), value, name))


def VSource(
    net: Netlist,
    node_p: int,
    node_n: int,
    *,
    name: str,
    value: float,
) -> tuple[Netlist, Component]:
    """
    Create a DC voltage source. Adds one branch-current unknown.

    Args:
        net: Netlist to add to
        node_p: Positive terminal
        node_n: Negative terminal
        name: Component name
        value: Voltage in Volts

    Returns:
        (new_netlist, component)

    Example:
        net, vs = VSource(net, 1, net.gnd, name="vs", value=5.0)
    """
    return net.add_component(Component("VSource", (node_p, node_n), value, name))
