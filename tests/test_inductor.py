"""
Test: Inductor branch current.

A DC source directly across an inductor fixes the inductor voltage, so
backward Euler ramps the branch current by V*dt/L every step:
    |I_L(k)| = k * V * dt / L
"""
import pytest


def _source_across_inductor(V, L_val):
    from circuitx.timedomain import Netlist, L, VSource

    net = Netlist()
    net, _ = VSource(net, 1, net.gnd, name="V1", value=V)
    net, _ = L(net, 1, net.gnd, name="L1", value=L_val)
    return net


def test_inductor_current_ramps_linearly():
    from circuitx.timedomain import simulate_backward_euler

    V, L_val, dt = 2.0, 10e-3, 1e-4
    net = _source_across_inductor(V, L_val)
    idx = net.index()
    result = simulate_backward_euler(net.assemble(), dt=dt, steps=50)

    i_L = idx.extra_index(1)
    slope = V * dt / L_val
    for k in range(51):
        assert abs(abs(float(result.states[k, i_L])) - k * slope) < 1e-9


def test_source_current_balances_inductor_current():
    from circuitx.timedomain import simulate_backward_euler

    net = _source_across_inductor(1.0, 1e-3)
    result = simulate_backward_euler(net.assemble(), dt=1e-5, steps=10)

    # KCL at node 1: I(V1) + I(L1) = 0
    for k in range(11):
        i_v, i_l = float(result.states[k, 1]), float(result.states[k, 2])
        assert abs(i_v + i_l) < 1e-12
        assert abs(float(result.states[k, 0]) - (1.0 if k else 0.0)) < 1e-12


def test_inductor_only_branch_is_not_singular():
    """An inductor between ground and ground still has L/dt on its diagonal."""
    from circuitx.timedomain import Netlist, L, R, simulate_backward_euler

    net = Netlist()
    net, _ = R(net, 1, net.gnd, name="R1", value=10.0)
    net, _ = L(net, net.gnd, net.gnd, name="L1", value=1e-3)

    result = simulate_backward_euler(net.assemble(), dt=1e-4, steps=3)
    assert result.states.shape == (4, 2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
