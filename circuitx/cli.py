"""
Command-line interface: run the transient analysis of a JSON netlist.

Usage::

    circuitx circuit.json
    circuitx circuit.json --no-plot --dump-matrices
    python -m circuitx circuit.json --permissive -v
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from . import __version__
from .config import DEFAULT_PLOT_FILENAME
from .errors import CircuitError, SingularSystem
from .loader import parse_netlist, parse_sim_config, read_netlist_file
from .timedomain.network import Indexing
from .timedomain.simulator import TransientResult, assemble, simulate_backward_euler

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="circuitx",
        description="Transient (backward Euler) simulation of a linear circuit.",
    )
    parser.add_argument("netlist", help="netlist to analyze (JSON)")
    parser.add_argument(
        "--permissive", action="store_true",
        help="skip components of unknown type instead of failing",
    )
    parser.add_argument("--no-plot", action="store_true", help="do not write the plot image")
    parser.add_argument(
        "--dump-matrices", action="store_true",
        help="print the assembled G, C matrices and b vector",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="log progress (-v) or debug details (-vv)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def format_trajectory(result: TransientResult, indexing: Indexing) -> str:
    """One line per recorded step: time followed by every node voltage."""
    states = np.asarray(result.states)
    times = np.asarray(result.times)
    lines = []
    for t, x in zip(times, states):
        volts = ", ".join(
            f"V{n}={x[indexing.index_of(n)]:.4f}" for n in range(1, indexing.max_node + 1)
        )
        lines.append(f"t={t:.6g}, {volts}" if volts else f"t={t:.6g}")
    return "\n".join(lines)


def _dump_matrices(system) -> None:
    print(f"G matrix:\n{np.asarray(system.G)}\n")
    print(f"C matrix:\n{np.asarray(system.C)}\n")
    print(f"b vector:\n{np.asarray(system.b)}\n")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    path = Path(args.netlist)
    try:
        data = read_netlist_file(path)
        config = parse_sim_config(data)
        strict = config.strict and not args.permissive
        netlist = parse_netlist(data, strict=strict)
        indexing = netlist.index()
        system = assemble(netlist, strict=strict)
        if args.dump_matrices:
            _dump_matrices(system)
        result = simulate_backward_euler(system, config.dt, config.steps)
    except SingularSystem as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        if e.trajectory is not None:
            print(f"  {e.trajectory.shape[0]} state(s) computed before the failure",
                  file=sys.stderr)
        return 1
    except CircuitError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    labels = indexing.labels()
    final = np.asarray(result.states[-1])
    print("Final state:")
    for label, value in zip(labels, final):
        print(f"  {label} = {value:.6g}")
    print()
    print(format_trajectory(result, indexing))

    if not args.no_plot:
        # matplotlib is only imported when a plot is requested
        from .plotting import plot_trajectory
        out = plot_trajectory(result, indexing, path.parent / DEFAULT_PLOT_FILENAME,
                              show=config.plot)
        logger.info("Plot saved to %s", out)

    return 0
