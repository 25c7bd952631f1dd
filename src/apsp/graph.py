from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .config import EnginePolicy
from .errors import InvalidInputError, NegativeCycleError


Vertex = int
Weight = Union[int, float]

INF = math.inf
NO_VERTEX = None


@dataclass(frozen=True)
class Edge:
    u: Vertex
    v: Vertex
    w: Weight


EdgeLike = Union[Edge, Sequence]


def _as_edge(raw: EdgeLike, num_vertices: int) -> Edge:
    if isinstance(raw, Edge):
        u, v, w = raw.u, raw.v, raw.w
    else:
        try:
            u, v, w = raw
        except (TypeError, ValueError):
            raise InvalidInputError(f"edge {raw!r} must be a (u, v, weight) triple") from None
    for end in (u, v):
        if isinstance(end, bool) or not isinstance(end, int):
            raise InvalidInputError(f"vertex {end!r} must be an integer index")
        if not 0 <= end < num_vertices:
            raise InvalidInputError(f"vertex {end} out of range [0, {num_vertices})")
    if isinstance(w, bool) or not isinstance(w, Real):
        raise InvalidInputError(f"weight {w!r} must be a real number")
    if not math.isfinite(w):
        raise InvalidInputError(f"weight {w!r} must be finite")
    return Edge(u, v, w)


def validate_graph(num_vertices: int, edges: Iterable[EdgeLike], policy: Optional[EnginePolicy] = None) -> List[Edge]:
    """Check vertex count and edges, returning them as ``Edge`` objects.

    Raises InvalidInputError on the first problem found; nothing is computed
    before validation succeeds.
    """
    policy = policy or EnginePolicy()
    if isinstance(num_vertices, bool) or not isinstance(num_vertices, int):
        raise InvalidInputError("num_vertices must be an integer")
    if num_vertices < 0:
        raise InvalidInputError("num_vertices must be >= 0")
    checked = [_as_edge(e, num_vertices) for e in edges]
    if not policy.allow_negative_edges:
        for e in checked:
            if e.w < 0:
                raise InvalidInputError(f"negative edge {e.u}->{e.v} ({e.w}) not allowed by policy")
    return checked


@dataclass(frozen=True)
class ShortestPaths:
    """All-pairs result: distance matrix, successor matrix and cycle flag.

    ``dist[i][j]`` is INF when j is unreachable from i; ``next[i][j]`` is
    NO_VERTEX when i == j or j is unreachable. When ``has_negative_cycle``
    is set, entries touched by the cycle are not shortest paths.
    """

    dist: Tuple[Tuple[Weight, ...], ...]
    next: Tuple[Tuple[Optional[Vertex], ...], ...]
    has_negative_cycle: bool

    @property
    def num_vertices(self) -> int:
        return len(self.dist)

    def check_vertices(self, *vertices: Vertex) -> None:
        for x in vertices:
            if isinstance(x, bool) or not isinstance(x, int) or not 0 <= x < self.num_vertices:
                raise InvalidInputError(f"vertex {x!r} out of range [0, {self.num_vertices})")

    def distance(self, source: Vertex, target: Vertex) -> Weight:
        self.check_vertices(source, target)
        return self.dist[source][target]

    def is_reachable(self, source: Vertex, target: Vertex) -> bool:
        return self.distance(source, target) != INF

    def path(self, source: Vertex, target: Vertex) -> List[Vertex]:
        return reconstruct_path(self, source, target)

    def negative_cycle_vertices(self) -> List[Vertex]:
        return [i for i in range(self.num_vertices) if self.dist[i][i] < 0]


def floyd_warshall(num_vertices: int, edges: Iterable[EdgeLike], policy: Optional[EnginePolicy] = None) -> ShortestPaths:
    """Floyd-Warshall all-pairs shortest paths with negative cycle detection.

    Parallel edges follow ``policy.parallel_edges``: "last" (default) lets
    the last edge for an ordered pair overwrite earlier ones, "min" keeps
    the lightest. Self-loops never raise the diagonal above 0.

    O(V^3) time, O(V^2) space.
    """
    policy = policy or EnginePolicy()
    checked = validate_graph(num_vertices, edges, policy)
    n = num_vertices

    dist: List[List[Weight]] = [[INF] * n for _ in range(n)]
    nxt: List[List[Optional[Vertex]]] = [[NO_VERTEX] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0

    loops: Dict[Vertex, Weight] = {}
    for e in checked:
        if e.u == e.v:
            if policy.parallel_edges == "min" and e.u in loops and loops[e.u] <= e.w:
                continue
            loops[e.u] = e.w
            continue
        if policy.parallel_edges == "min" and e.w >= dist[e.u][e.v]:
            continue
        dist[e.u][e.v] = e.w
        nxt[e.u][e.v] = e.v

    # the diagonal takes a resolved self-loop only when it is negative
    for u, w in loops.items():
        if w < 0:
            dist[u][u] = w
            nxt[u][u] = u

    for k in range(n):
        row_k = dist[k]
        for i in range(n):
            row_i = dist[i]
            if row_i[k] == INF:
                continue
            next_i = nxt[i]
            for j in range(n):
                dkj = row_k[j]
                if dkj == INF:
                    continue
                # row_i[k] itself can drop while j sweeps past k on a negative cycle
                alt = row_i[k] + dkj
                if alt < row_i[j]:
                    row_i[j] = alt
                    next_i[j] = next_i[k]

    has_negative_cycle = any(dist[i][i] < 0 for i in range(n))
    return ShortestPaths(
        dist=tuple(tuple(row) for row in dist),
        next=tuple(tuple(row) for row in nxt),
        has_negative_cycle=has_negative_cycle,
    )


def reconstruct_path(result: ShortestPaths, source: Vertex, target: Vertex) -> List[Vertex]:
    """Walk the successor matrix from source to target.

    Returns [] when target is unreachable and [source] when source == target.
    Raises NegativeCycleError if the walk does not reach target within V steps.
    """
    result.check_vertices(source, target)
    if source == target:
        return [source]
    if result.next[source][target] is NO_VERTEX:
        return []
    path = [source]
    cur = source
    for _ in range(result.num_vertices):
        cur = result.next[cur][target]
        if cur is NO_VERTEX:
            # only possible when a negative cycle rewrote part of the chain
            raise NegativeCycleError(f"successor chain {source}->{target} broken at {path[-1]}")
        path.append(cur)
        if cur == target:
            return path
    raise NegativeCycleError(f"successor chain {source}->{target} does not terminate")
