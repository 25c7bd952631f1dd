from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import EnginePolicy
from .errors import InvalidInputError, NegativeCycleError
from .graph import INF, EdgeLike, ShortestPaths, Vertex, Weight, reconstruct_path, validate_graph


@dataclass
class RouteResult:
    path: List[Vertex] = field(default_factory=list)
    cost: Weight = INF
    ok: bool = False
    reason: str = ""


def affected_by_negative_cycle(result: ShortestPaths, source: Vertex, target: Vertex) -> bool:
    """True if some vertex on a negative cycle is reachable from source and reaches target."""
    for k in result.negative_cycle_vertices():
        if result.dist[source][k] != INF and result.dist[k][target] != INF:
            return True
    return False


def shortest_route(result: ShortestPaths, source: Vertex, target: Vertex) -> RouteResult:
    try:
        result.check_vertices(source, target)
    except InvalidInputError:
        return RouteResult(reason="vertex out of range")

    if affected_by_negative_cycle(result, source, target):
        return RouteResult(reason="negative cycle affects path")
    if result.dist[source][target] == INF:
        return RouteResult(reason="unreachable")

    try:
        path = reconstruct_path(result, source, target)
    except NegativeCycleError:
        return RouteResult(reason="path reconstruction cycle detected")
    return RouteResult(path, result.dist[source][target], True, "ok")


def plan_route(result: ShortestPaths, waypoints: Sequence[Vertex]) -> RouteResult:
    """Plan a route visiting waypoints in order, e.g. [A, B, C, A].

    Legs are joined without repeating the shared boundary vertex. The first
    failing leg aborts the plan.
    """
    if not waypoints:
        return RouteResult(reason="no waypoints")
    if len(waypoints) == 1:
        return shortest_route(result, waypoints[0], waypoints[0])

    path: List[Vertex] = []
    total: Weight = 0
    for a, b in zip(waypoints, waypoints[1:]):
        leg = shortest_route(result, a, b)
        if not leg.ok:
            return RouteResult(reason=f"{a}->{b} planning failed: {leg.reason}")
        path = leg.path if not path else path + leg.path[1:]
        total += leg.cost
    return RouteResult(path, total, True, "ok")


def _direct_weights(edges: Iterable[EdgeLike], num_vertices: int, policy: EnginePolicy) -> Dict[Tuple[Vertex, Vertex], Weight]:
    weights: Dict[Tuple[Vertex, Vertex], Weight] = {}
    for e in validate_graph(num_vertices, edges, policy):
        key = (e.u, e.v)
        if policy.parallel_edges == "min" and key in weights and weights[key] <= e.w:
            continue
        weights[key] = e.w
    return weights


def path_weight(num_vertices: int, edges: Iterable[EdgeLike], path: Sequence[Vertex], policy: Optional[EnginePolicy] = None) -> Weight:
    """Sum direct edge weights along path, resolving parallel edges like the engine does."""
    policy = policy or EnginePolicy()
    weights = _direct_weights(edges, num_vertices, policy)
    total: Weight = 0
    for a, b in zip(path, path[1:]):
        if (a, b) not in weights:
            raise InvalidInputError(f"no edge {a}->{b} on path")
        total += weights[(a, b)]
    return total
