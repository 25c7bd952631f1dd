import json

from apsp.graph import floyd_warshall
from apsp.render import format_distance_matrix, format_next_matrix, format_report, to_jsonable


def test_sentinels_are_human_readable():
    res = floyd_warshall(2, [(0, 1, 4)])
    assert format_distance_matrix(res).splitlines() == ["  0   4", "INF   0"]
    assert format_next_matrix(res).splitlines() == ["N/A   1", "N/A N/A"]


def test_report_mentions_negative_cycle():
    report = format_report(floyd_warshall(2, [(0, 1, -1), (1, 0, -1)]))
    assert report.startswith("Distance Matrix:")
    assert "Next Matrix:" in report
    assert report.endswith("Negative Cycle: Yes")
    assert format_report(floyd_warshall(1, [])).endswith("Negative Cycle: No")


def test_to_jsonable_uses_null_for_infinity():
    data = to_jsonable(floyd_warshall(2, [(0, 1, 4)]))
    assert data["dist"] == [[0, 4], [None, 0]]
    assert data["next"] == [[None, 1], [None, None]]
    assert data["has_negative_cycle"] is False
    json.dumps(data, allow_nan=False)


def test_to_jsonable_handles_overflow_on_negative_cycle():
    res = floyd_warshall(2, [(0, 1, -1e308), (1, 0, -1e308)])
    assert res.has_negative_cycle
    data = to_jsonable(res)
    assert None in data["dist"][0] + data["dist"][1]
    json.dumps(data, allow_nan=False)
