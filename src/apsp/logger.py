from __future__ import annotations

import json
import math
import os
import sys
from datetime import datetime, timezone
from typing import Any

from .config import log_backups, log_dir, log_max_bytes


REDACT_KEYS = {"token", "auth", "authorization", "password", "secret", "api_key"}


def _clean(obj: Any) -> Any:
    """Redact secret-like keys and turn non-finite floats into strings for JSON."""
    if isinstance(obj, dict):
        return {k: ("<redacted>" if str(k).lower() in REDACT_KEYS else _clean(v)) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_clean(v) for v in obj]
    if isinstance(obj, float) and not math.isfinite(obj):
        return "INF" if obj > 0 else ("-INF" if obj < 0 else "NaN")
    return obj


def _rotate(path: str, backups: int) -> None:
    for i in range(backups, 0, -1):
        older = f"{path}.{i}"
        newer = f"{path}.{i-1}" if i > 1 else path
        if os.path.exists(older):
            os.remove(older)
        if os.path.exists(newer):
            os.rename(newer, older)


def _write_file_line(line: str) -> None:
    directory = log_dir()
    try:
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, "events.log")
        if os.path.exists(path) and os.path.getsize(path) > log_max_bytes():
            _rotate(path, log_backups())
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError:
        # file logging is best effort; stdout already has the line
        pass


def log_event(event: str, **fields: Any) -> None:
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        **_clean(fields),
    }
    line = json.dumps(record, ensure_ascii=False)
    sys.stdout.write(line + "\n")
    sys.stdout.flush()
    _write_file_line(line)
