"""
Test: Node voltage plots.
"""
import pytest


def test_plot_trajectory_writes_image(tmp_path):
    from circuitx.plotting import plot_trajectory
    from circuitx.timedomain import Netlist, R, C, VSource, simulate_backward_euler

    net = Netlist()
    net, _ = VSource(net, 1, net.gnd, name="V1", value=5.0)
    net, _ = R(net, 1, 2, name="R1", value=1000.0)
    net, _ = C(net, 2, net.gnd, name="C1", value=1e-6)

    result = simulate_backward_euler(net.assemble(), dt=1e-4, steps=50)
    out = plot_trajectory(result, net.index(), tmp_path / "rc.png")

    assert out == tmp_path / "rc.png"
    assert out.stat().st_size > 0


def test_plot_of_circuit_without_nodes(tmp_path):
    from circuitx.plotting import plot_trajectory
    from circuitx.timedomain import Netlist, simulate_backward_euler

    net = Netlist()
    result = simulate_backward_euler(net.assemble(), dt=1e-3, steps=2)
    out = plot_trajectory(result, net.index(), tmp_path / "empty.png")
    assert out.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
