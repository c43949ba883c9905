"""
Test: command-line entry point.
"""
import json
import pytest


def _write(tmp_path, data, name="circuit.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


@pytest.fixture
def rc_circuit(tmp_path):
    return _write(tmp_path, {
        "components": {
            "V1": {"type": "voltage_source", "nodes": [1, 0], "value": 5.0},
            "R1": {"type": "resistor", "nodes": [1, 2], "value": 1000.0},
            "C1": {"type": "capacitor", "nodes": [2, 0], "value": 1e-6},
        },
        "analysis": {"transient": {"dt": 1e-3, "steps": 3, "plot": False}},
    })


def test_simulate_prints_final_state_and_table(rc_circuit, capsys):
    from circuitx.cli import main

    assert main([rc_circuit, "--no-plot"]) == 0

    out = capsys.readouterr().out
    assert "Final state:" in out
    assert "V2 = 4.375" in out
    assert "I(V1) =" in out
    assert "t=0, V1=0.0000, V2=0.0000" in out
    assert "t=0.003, V1=5.0000, V2=4.3750" in out


def test_writes_plot_next_to_netlist(rc_circuit, tmp_path):
    from circuitx.cli import main

    assert main([rc_circuit]) == 0
    assert (tmp_path / "plot.png").exists()


def test_no_plot_flag(rc_circuit, tmp_path):
    from circuitx.cli import main

    assert main([rc_circuit, "--no-plot"]) == 0
    assert not (tmp_path / "plot.png").exists()


def test_dump_matrices(rc_circuit, capsys):
    from circuitx.cli import main

    assert main([rc_circuit, "--no-plot", "--dump-matrices"]) == 0
    out = capsys.readouterr().out
    assert "G matrix:" in out
    assert "C matrix:" in out
    assert "b vector:" in out


def test_missing_file_exits_nonzero(tmp_path, capsys):
    from circuitx.cli import main

    assert main([str(tmp_path / "missing.json"), "--no-plot"]) == 1
    err = capsys.readouterr().err
    assert "Error: InvalidNetlist: cannot read" in err


def test_broken_json_is_a_netlist_error(tmp_path, capsys):
    from circuitx.cli import main

    path = tmp_path / "broken.json"
    path.write_text("{ \"components\": ")
    assert main([str(path), "--no-plot"]) == 1
    assert "Error: InvalidNetlist: invalid JSON" in capsys.readouterr().err


def test_invalid_component_value(tmp_path, capsys):
    from circuitx.cli import main

    path = _write(tmp_path, {
        "components": {"R1": {"type": "resistor", "nodes": [1, 0], "value": 0}},
        "analysis": {"transient": {"dt": 1e-3, "steps": 3}},
    })
    assert main([path, "--no-plot"]) == 1
    assert "R1" in capsys.readouterr().err


class TestUnknownTypes:

    DATA = {
        "components": {
            "R1": {"type": "resistor", "nodes": [1, 0], "value": 100.0},
            "Q1": {"type": "transistor", "nodes": [1, 0], "value": 1.0},
        },
        "analysis": {"transient": {"dt": 1e-3, "steps": 2}},
    }

    def test_strict_by_default(self, tmp_path, capsys):
        from circuitx.cli import main

        assert main([_write(tmp_path, self.DATA), "--no-plot"]) == 1
        assert "transistor" in capsys.readouterr().err

    def test_permissive_flag(self, tmp_path):
        from circuitx.cli import main

        assert main([_write(tmp_path, self.DATA), "--no-plot", "--permissive"]) == 0


def test_singular_system_exits_nonzero(tmp_path, capsys):
    from circuitx.cli import main

    path = _write(tmp_path, {
        "components": {
            "R1": {"type": "resistor", "nodes": [1, 0], "value": 100.0},
            "V1": {"type": "voltage_source", "nodes": [0, 0], "value": 1.0},
        },
        "analysis": {"transient": {"dt": 1e-3, "steps": 2}},
    })
    assert main([path, "--no-plot"]) == 1
    err = capsys.readouterr().err
    assert "singular" in err
    assert "1 state(s)" in err


def test_bad_dt_exits_nonzero(tmp_path):
    from circuitx.cli import main

    path = _write(tmp_path, {
        "components": {"R1": {"type": "resistor", "nodes": [1, 0], "value": 100.0}},
        "analysis": {"transient": {"dt": 0, "steps": 2}},
    })
    assert main([path, "--no-plot"]) == 1


def test_usage_error():
    from circuitx.cli import main

    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
