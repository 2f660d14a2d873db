"""HTML export of the operation log.

Why it lives in adapters:
- HTML is an infrastructure detail (Jinja2).
- The core only knows the `OperationLog` aggregate and its `LogEntry` items.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.services.presenter import OperationLog

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_log_html(*, log: OperationLog, base_url: str = "") -> str:
    """Render a self-contained page: navigation list plus detail blocks.

    Entries follow the log's display order; the active one carries the
    `active` class, and every link targets its entry's `item-N` anchor.
    """

    entries = [
        {
            "anchor": entry.anchor,
            "header": entry.header,
            "detail_html": entry.detail_html,
            "pretty": entry.pretty_payload(),
            "is_error": entry.header.split(" : ", 1)[0].endswith("Error"),
        }
        for entry in log.ordered()
    ]
    template = _get_env().get_template("operations.html")
    return template.render(
        entries=entries,
        active_anchor=log.active_anchor,
        base_url=base_url,
        generated_at=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )


def export_log_html(*, log: OperationLog, output_path: Path, base_url: str = "") -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_log_html(log=log, base_url=base_url), encoding="utf-8")
    return output_path
