from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from .graph import INF, NO_VERTEX, ShortestPaths, Weight


def _fmt_dist(d: Weight) -> str:
    return "INF" if d == INF else str(d)


def _fmt_next(n: Optional[int]) -> str:
    return "N/A" if n is NO_VERTEX else str(n)


def _table(cells: List[List[str]]) -> str:
    if not cells:
        return ""
    width = max(len(c) for row in cells for c in row)
    return "\n".join(" ".join(c.rjust(width) for c in row) for row in cells)


def format_distance_matrix(result: ShortestPaths) -> str:
    return _table([[_fmt_dist(d) for d in row] for row in result.dist])


def format_next_matrix(result: ShortestPaths) -> str:
    return _table([[_fmt_next(n) for n in row] for row in result.next])


def format_report(result: ShortestPaths) -> str:
    parts = [
        "Distance Matrix:",
        format_distance_matrix(result),
        "",
        "Next Matrix:",
        format_next_matrix(result),
        "",
        f"Negative Cycle: {'Yes' if result.has_negative_cycle else 'No'}",
    ]
    return "\n".join(parts)


def to_jsonable(result: ShortestPaths) -> Dict[str, Any]:
    """Plain dict with non-finite distances as None (JSON has no infinity).

    Besides unreachable pairs this covers float overflow to -inf on a
    negative cycle.
    """
    return {
        "num_vertices": result.num_vertices,
        "dist": [[d if math.isfinite(d) else None for d in row] for row in result.dist],
        "next": [list(row) for row in result.next],
        "has_negative_cycle": result.has_negative_cycle,
        "negative_cycle_vertices": result.negative_cycle_vertices(),
    }
