"""JSON export of the operation log.

Why JSON:
- Interoperability with other tooling (ticketing, audit pipelines).
- Keeps the full payloads without depending on the HTML rendering.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.services.presenter import OperationLog


def log_to_json(log: OperationLog) -> str:
    payload = {
        "active": log.active_anchor,
        "entries": [
            {"anchor": entry.anchor, **entry.model_dump(mode="json")}
            for entry in log.entries
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_log_json(*, log: OperationLog, output_path: Path) -> Path:
    """Export the log as UTF-8 JSON in insertion order with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(log_to_json(log), encoding="utf-8")
    return output_path
