from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import InvalidInputError


PARALLEL_EDGE_MODES = ("last", "min")


@dataclass(frozen=True)
class EnginePolicy:
    # "last": a later (u, v) edge overwrites an earlier one, "min": keep the lightest
    parallel_edges: str = "last"
    allow_negative_edges: bool = True

    def __post_init__(self) -> None:
        if self.parallel_edges not in PARALLEL_EDGE_MODES:
            raise InvalidInputError(
                f"parallel_edges must be one of {', '.join(PARALLEL_EDGE_MODES)}, got {self.parallel_edges!r}"
            )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "EnginePolicy":
        data = data or {}
        allow_negative = data.get("allow_negative_edges", True)
        if not isinstance(allow_negative, bool):
            raise InvalidInputError(f"allow_negative_edges must be a boolean, got {allow_negative!r}")
        return cls(
            parallel_edges=str(data.get("parallel_edges", "last")).lower(),
            allow_negative_edges=allow_negative,
        )


def log_dir() -> str:
    return os.environ.get("APSP_LOG_DIR", ".logs")


def log_max_bytes() -> int:
    return int(os.environ.get("APSP_LOG_MAX_BYTES", "1048576"))  # 1MB


def log_backups() -> int:
    return int(os.environ.get("APSP_LOG_BACKUPS", "5"))
