from __future__ import annotations

import os
import platform
import uuid
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from .config import EnginePolicy
from .errors import InvalidInputError
from .graph import INF, floyd_warshall
from .logger import log_event
from .render import to_jsonable
from .routes import plan_route


APP_VERSION = "0.1.0"
RUN_ID = os.environ.get("APSP_RUN_ID", str(uuid.uuid4()))
app = FastAPI(title="All-Pairs Shortest Path API", version=APP_VERSION)

# Summary of the last computation, surfaced by /api/status
LAST_COMPUTE: Dict[str, Any] | None = None


class Policy(BaseModel):
    parallel_edges: str = "last"
    allow_negative_edges: bool = True


class GraphRequest(BaseModel):
    num_vertices: int
    edges: List[List[Union[int, float]]] = Field(default_factory=list, description="Edges as [u, v, weight]")
    policy: Optional[Policy] = None


class RouteRequest(GraphRequest):
    waypoints: List[int]


class ComputeResponse(BaseModel):
    num_vertices: int
    dist: List[List[Optional[Union[int, float]]]]
    next: List[List[Optional[int]]]
    has_negative_cycle: bool
    negative_cycle_vertices: List[int]


class RouteResponse(BaseModel):
    ok: bool
    reason: str
    path: List[int]
    cost: Optional[Union[int, float]]


def _compute(req: GraphRequest):
    try:
        policy = EnginePolicy.from_mapping(req.policy.model_dump() if req.policy else None)
        return floyd_warshall(req.num_vertices, req.edges, policy)
    except InvalidInputError as exc:
        log_event("error", action="compute", error=str(exc))
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/api/compute", response_model=ComputeResponse)
def api_compute(req: GraphRequest):
    global LAST_COMPUTE
    result = _compute(req)
    log_event("compute", vertices=req.num_vertices, edges=len(req.edges), negative_cycle=result.has_negative_cycle)
    LAST_COMPUTE = {"num_vertices": req.num_vertices, "edges": len(req.edges), "has_negative_cycle": result.has_negative_cycle}
    return ComputeResponse(**to_jsonable(result))


@app.post("/api/route", response_model=RouteResponse)
def api_route(req: RouteRequest):
    result = _compute(req)
    res = plan_route(result, req.waypoints)
    log_event("route", ok=res.ok, reason=res.reason, path=res.path, cost=res.cost, waypoints=req.waypoints)
    cost = res.cost if res.ok and res.cost != INF else None
    return RouteResponse(ok=res.ok, reason=res.reason, path=res.path, cost=cost)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    req_id = str(uuid.uuid4())
    log_event("http_request", method=request.method, path=request.url.path, request_id=req_id, run_id=RUN_ID)
    response = await call_next(request)
    response.headers["X-Request-Id"] = req_id
    response.headers["X-Run-Id"] = RUN_ID
    log_event("http_response", path=request.url.path, status=response.status_code, request_id=req_id, run_id=RUN_ID)
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/status")
def status():
    info: Dict[str, Any] = {
        "status": "ok",
        "version": APP_VERSION,
        "run_id": RUN_ID,
        "python": platform.python_version(),
    }
    if LAST_COMPUTE is not None:
        info["last_compute"] = LAST_COMPUTE
    return info
