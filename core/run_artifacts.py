"""Load report artifacts for operational reporting."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any


def write_json(payload: Any, path: str) -> str:
    """Write ``payload`` as indented JSON, creating parent directories."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return path


def write_load_report(
    report: dict[str, Any],
    load_id: str,
    output_dir: str = "output/load_reports",
) -> str:
    """Write a JSON load report named after ``load_id`` and return its path."""
    payload = dict(report)
    payload.setdefault("load_id", load_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    return write_json(payload, os.path.join(output_dir, f"{load_id}.json"))
