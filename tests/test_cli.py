import json

import pytest

from apsp.cli import main, parse_edges
from apsp.errors import InvalidInputError


@pytest.fixture(autouse=True)
def _log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("APSP_LOG_DIR", str(tmp_path / "logs"))


def test_parse_edges_keeps_int_weights():
    assert parse_edges(["0:1:10", "1:2:-2.5"]) == [(0, 1, 10), (1, 2, -2.5)]
    with pytest.raises(InvalidInputError):
        parse_edges(["0-1-10"])


def test_demo_prints_report(capsys):
    assert main(["demo"]) == 0
    out = capsys.readouterr().out
    assert "Distance Matrix:" in out
    assert "Negative Cycle: No" in out


def test_compute_json(capsys):
    assert main(["compute", "--vertices", "3", "--edges", "0:1:-1", "1:2:-2", "2:0:-3", "--json"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    log = json.loads(lines[0])
    assert log["event"] == "compute" and log["negative_cycle"] is True
    data = json.loads(lines[-1])
    assert data["has_negative_cycle"] is True


def test_compute_parallel_edges_min(capsys):
    assert main(["compute", "--vertices", "2", "--edges", "0:1:1", "0:1:7", "--parallel-edges", "min", "--json"]) == 0
    data = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert data["dist"][0][1] == 1


def test_invalid_input_exit_code(capsys):
    assert main(["compute", "--vertices", "2", "--edges", "0:5:1"]) == 2
    log = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert log["event"] == "error" and "out of range" in log["error"]


def test_forbid_negative_edges(capsys):
    assert main(["compute", "--vertices", "2", "--edges", "0:1:-1", "--forbid-negative-edges"]) == 2


def test_route_command(capsys, tmp_path):
    rc = main(["route", "--vertices", "5", "--edges", "0:1:10", "0:3:5", "3:1:3", "1:2:1", "--waypoints", "0", "2"])
    assert rc == 0
    log = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert log["path"] == [0, 3, 1, 2]
    assert log["cost"] == 9
    assert (tmp_path / "logs" / "events.log").exists()


def test_route_unreachable(capsys):
    assert main(["route", "--vertices", "3", "--edges", "0:1:1", "--waypoints", "1", "0"]) == 2
    log = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert log["ok"] is False
    assert log["cost"] == "INF"


def _strict_constant(name):
    raise ValueError(f"non-standard JSON constant {name}")


def test_compute_json_is_strict_on_overflow(capsys):
    assert main(["compute", "--vertices", "2", "--edges", "0:1:-1e308", "1:0:-1e308", "--json"]) == 0
    data = json.loads(capsys.readouterr().out.strip().splitlines()[-1], parse_constant=_strict_constant)
    assert data["has_negative_cycle"] is True
    assert data["dist"][1][1] is None
