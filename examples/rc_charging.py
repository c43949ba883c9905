"""
Example: RC charging with backward Euler

Circuit:
    V1 ---[R1]---+--- V2
                 |
                [C1]
                 |
                GND

Capacitor voltage: V2(t) = V1 * (1 - exp(-t / tau)), tau = R * C

Backward Euler is first order: the error at t = tau shrinks roughly in
proportion to dt.
"""
import math
from circuitx.timedomain import Netlist, R, C, VSource, simulate_backward_euler


def build_rc(V=5.0, R_val=1000.0, C_val=1e-6):
    net = Netlist()
    net, _ = VSource(net, 1, net.gnd, name="V1", value=V)
    net, _ = R(net, 1, 2, name="R1", value=R_val)
    net, _ = C(net, 2, net.gnd, name="C1", value=C_val)
    return net


def voltage_at_tau(samples_per_tau, V=5.0, R_val=1000.0, C_val=1e-6):
    """Capacitor voltage at t = tau for a given resolution."""
    tau = R_val * C_val
    net = build_rc(V, R_val, C_val)
    idx = net.index()
    result = simulate_backward_euler(net.assemble(), dt=tau / samples_per_tau,
                                     steps=samples_per_tau)
    return float(result.states[-1, idx.index_of(2)])


def main():
    print("=" * 60)
    print("RC Charging (backward Euler)")
    print("=" * 60)

    V = 5.0
    expected = V * (1 - math.exp(-1))
    print(f"\n   Exact V2(tau) = {expected:.6f} V\n")
    print(f"   {'dt/tau':>10s}  {'V2(tau)':>10s}  {'error':>10s}")

    for samples in [10, 100, 1000]:
        v = voltage_at_tau(samples, V=V)
        print(f"   {1 / samples:>10.4f}  {v:>10.6f}  {v - expected:>10.2e}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
