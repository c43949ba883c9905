"""
Read circuits and analysis settings from JSON netlist files.

File layout:

    {
        "components": {
            "V1": {"type": "voltage_source", "nodes": [1, 0], "value": 5.0},
            "R1": {"type": "resistor", "nodes": [1, 2], "value": 1000.0},
            "C1": {"type": "capacitor", "nodes": [2, 0], "value": 1e-6}
        },
        "analysis": {
            "transient": {"dt": 1e-4, "steps": 100, "plot": false}
        }
    }
"""

from __future__ import annotations
import json
import logging
import numbers
from pathlib import Path

from .config import SimConfig
from .errors import InvalidNetlist, InvalidSimulationConfig, UnknownComponentType
from .timedomain.components import TYPE_TAGS
from .timedomain.network import Component, Netlist

logger = logging.getLogger(__name__)


def read_netlist_file(path) -> dict:
    """Decode a netlist file. Unreadable or malformed files are InvalidNetlist."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise InvalidNetlist(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InvalidNetlist(f"invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise InvalidNetlist(f"{path}: top level must be an object")
    return data


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _parse_component(name: str, obj) -> tuple[str, tuple[int, int], float]:
    if not isinstance(obj, dict):
        raise InvalidNetlist(f"{name}: component entry must be an object")
    for key in ("type", "nodes", "value"):
        if key not in obj:
            raise InvalidNetlist(f"{name}: missing '{key}'")

    type_tag = obj["type"]
    nodes = obj["nodes"]
    value = obj["value"]

    if not isinstance(type_tag, str):
        raise InvalidNetlist(f"{name}: 'type' must be a string")
    if not isinstance(nodes, list) or len(nodes) != 2 or not all(
        isinstance(n, int) and not isinstance(n, bool) for n in nodes
    ):
        raise InvalidNetlist(f"{name}: 'nodes' must be a list of two integers, got {nodes!r}")
    if nodes[0] < 0 or nodes[1] < 0:
        raise InvalidNetlist(f"{name}: terminal ids must be >= 0, got {nodes!r}")
    if not _is_number(value):
        raise InvalidNetlist(f"{name}: 'value' must be a number, got {value!r}")

    return type_tag, (nodes[0], nodes[1]), float(value)


def parse_netlist(data: dict, *, strict: bool = True) -> Netlist:
    """
    Build a Netlist from the decoded JSON document.

    Components keep document order, which fixes the order of the extra
    unknowns.

    Args:
        data: Decoded netlist document
        strict: Unknown type tags raise; otherwise they are kept with their
            raw tag (and skipped at assembly)

    Raises:
        InvalidNetlist: malformed structure
        UnknownComponentType: unknown type tag in strict mode
    """
    components = data.get("components")
    if not isinstance(components, dict):
        raise InvalidNetlist("'components' must be an object mapping names to components")

    net = Netlist()
    for name, obj in components.items():
        type_tag, nodes, value = _parse_component(name, obj)
        kind = TYPE_TAGS.get(type_tag)
        if kind is None:
            if strict:
                raise UnknownComponentType(f"{name}: unknown component type {type_tag!r}")
            logger.warning("%s: unknown component type %r", name, type_tag)
            kind = type_tag
        net, _ = net.add_component(Component(kind, nodes, value, name))

    logger.debug("Loaded %d components, max node %d", len(net.components), net.max_node)
    return net


def load_netlist(path, *, strict: bool = True) -> Netlist:
    """Read a Netlist from a JSON file. See parse_netlist."""
    return parse_netlist(read_netlist_file(path), strict=strict)


def parse_sim_config(data: dict) -> SimConfig:
    """
    Read the analysis section.

    When several analyses are listed the last one wins.

    Raises:
        InvalidSimulationConfig: missing section, keys, or wrong types
    """
    analysis = data.get("analysis")
    if not isinstance(analysis, dict) or not analysis:
        raise InvalidSimulationConfig("'analysis' must be a non-empty object")

    config = None
    for name, obj in analysis.items():
        if not isinstance(obj, dict):
            raise InvalidSimulationConfig(f"analysis {name!r} must be an object")
        for key in ("dt", "steps"):
            if key not in obj:
                raise InvalidSimulationConfig(f"analysis {name!r}: missing '{key}'")

        dt = obj["dt"]
        steps = obj["steps"]
        plot = obj.get("plot", False)
        strict = obj.get("strict", True)

        if not _is_number(dt):
            raise InvalidSimulationConfig(f"analysis {name!r}: 'dt' must be a number")
        if not isinstance(steps, int) or isinstance(steps, bool):
            raise InvalidSimulationConfig(f"analysis {name!r}: 'steps' must be an integer")
        if not isinstance(plot, bool) or not isinstance(strict, bool):
            raise InvalidSimulationConfig(
                f"analysis {name!r}: 'plot' and 'strict' must be booleans"
            )
        config = SimConfig(dt=float(dt), steps=steps, plot=plot, strict=strict)

    return config


def load_sim_config(path) -> SimConfig:
    """Read the analysis settings from a JSON netlist file."""
    try:
        data = read_netlist_file(path)
    except InvalidNetlist as e:
        raise InvalidSimulationConfig(str(e)) from e
    return parse_sim_config(data)
