from __future__ import annotations

import argparse
import json
from typing import List, Tuple

from .config import PARALLEL_EDGE_MODES, EnginePolicy
from .errors import InvalidInputError
from .graph import Weight, floyd_warshall
from .logger import log_event
from .render import format_report, to_jsonable
from .routes import plan_route


SAMPLE_VERTICES = 5
SAMPLE_EDGES = [
    (0, 1, 10), (0, 3, 5), (1, 3, 2), (1, 2, 1), (2, 4, 4),
    (3, 1, 3), (3, 2, 9), (3, 4, 2), (4, 2, 6),
]


def _add_graph_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--vertices", type=int, required=True, help="Number of vertices, labelled 0..N-1")
    p.add_argument("--edges", nargs="*", default=[], help="Edges of form u:v:weight, e.g., 0:1:10 1:2:-3")
    p.add_argument("--parallel-edges", choices=PARALLEL_EDGE_MODES, default="last",
                   help="How to resolve repeated u:v edges (default: last one wins)")
    p.add_argument("--forbid-negative-edges", action="store_true", help="Reject negative edge weights")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="apsp", description="All-pairs shortest paths (Floyd-Warshall)")
    sub = p.add_subparsers(dest="cmd", required=True)

    compute = sub.add_parser("compute", help="Print distance and next matrices for a graph")
    _add_graph_args(compute)
    compute.add_argument("--json", action="store_true", help="Print the result as JSON")

    route = sub.add_parser("route", help="Shortest route visiting the given vertices in order")
    _add_graph_args(route)
    route.add_argument("--waypoints", type=int, nargs="+", required=True, help="Vertices to visit, e.g., 0 2 4")

    demo = sub.add_parser("demo", help="Run the built-in 5-vertex sample graph")
    demo.add_argument("--json", action="store_true", help="Print the result as JSON")

    return p


def _parse_weight(text: str) -> Weight:
    try:
        return int(text)
    except ValueError:
        return float(text)


def parse_edges(edge_specs: List[str]) -> List[Tuple[int, int, Weight]]:
    edges = []
    for spec in edge_specs:
        try:
            u, v, w = spec.split(":")
            edges.append((int(u), int(v), _parse_weight(w)))
        except ValueError:
            raise InvalidInputError(f"Invalid edge spec '{spec}'. Expected u:v:weight") from None
    return edges


def _policy(args: argparse.Namespace) -> EnginePolicy:
    return EnginePolicy(parallel_edges=args.parallel_edges, allow_negative_edges=not args.forbid_negative_edges)


def _print_result(result, as_json: bool) -> None:
    if as_json:
        print(json.dumps(to_jsonable(result), allow_nan=False))
    else:
        print(format_report(result))


def cmd_compute(args: argparse.Namespace) -> int:
    result = floyd_warshall(args.vertices, parse_edges(args.edges), _policy(args))
    log_event("compute", vertices=args.vertices, edges=len(args.edges), negative_cycle=result.has_negative_cycle)
    _print_result(result, args.json)
    return 0


def cmd_route(args: argparse.Namespace) -> int:
    result = floyd_warshall(args.vertices, parse_edges(args.edges), _policy(args))
    res = plan_route(result, args.waypoints)
    log_event("route", ok=res.ok, reason=res.reason, path=res.path, cost=res.cost, waypoints=args.waypoints)
    return 0 if res.ok else 2


def cmd_demo(args: argparse.Namespace) -> int:
    result = floyd_warshall(SAMPLE_VERTICES, SAMPLE_EDGES)
    log_event("compute", vertices=SAMPLE_VERTICES, edges=len(SAMPLE_EDGES), negative_cycle=result.has_negative_cycle)
    _print_result(result, args.json)
    return 0


def main(argv: List[str] | None = None) -> int:
    p = build_arg_parser()
    args = p.parse_args(argv)
    handlers = {"compute": cmd_compute, "route": cmd_route, "demo": cmd_demo}
    try:
        return handlers[args.cmd](args)
    except InvalidInputError as exc:
        log_event("error", action=args.cmd, error=str(exc))
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
