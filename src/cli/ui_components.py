"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- The same tables/panels serve the interactive panel and the one-shot commands.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString, Tag
from rich.align import Align
from rich.console import Console, Group
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import LogEntry


def print_banner(console: Console, *, base_url: str) -> None:
    """Print the welcome banner (skipped in non-interactive/JSON modes)."""

    title = Text("CDN Validator", style="bold cyan")
    subtitle = Text(f"Distribution invalidations • {base_url}", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def html_fragment_to_text(fragment: str) -> Text:
    """Render the small detail fragments (`<b>`, `<br />`) as Rich text."""

    text = Text()
    if not fragment:
        return text

    soup = BeautifulSoup(fragment, "html.parser")
    for node in soup.contents:
        if isinstance(node, NavigableString):
            text.append(str(node))
        elif isinstance(node, Tag) and node.name == "br":
            text.append("\n")
        elif isinstance(node, Tag) and node.name in ("b", "strong"):
            text.append(node.get_text(), style="bold")
        elif isinstance(node, Tag):
            text.append(node.get_text())
    text.rstrip()
    return text


def build_entry_panel(entry: LogEntry, *, active: bool = False) -> Panel:
    """Detail block: heading, detail fragment and pretty-printed payload."""

    is_error = entry.header.split(" : ", 1)[0].endswith("Error")
    parts: list[object] = []
    details = html_fragment_to_text(entry.detail_html)
    if details.plain:
        parts.append(details)
    if entry.has_payload:
        parts.append(JSON(entry.pretty_payload()))

    title = Text(entry.header, style="bold red" if is_error else "bold green")
    subtitle = Text(f"#{entry.anchor}" + (" (active)" if active else ""), style="dim")
    return Panel(
        Group(*parts) if parts else Text(""),
        title=title,
        subtitle=subtitle,
        border_style="red" if is_error else "green",
    )


def build_history_table(entries: list[LogEntry], active_anchor: str | None) -> Table:
    """Navigation list of the operation log."""

    table = Table(title="Operations")
    table.add_column("", no_wrap=True)
    table.add_column("Anchor", style="cyan", no_wrap=True)
    table.add_column("Operation", style="white")
    for entry in entries:
        marker = "▶" if entry.anchor == active_anchor else ""
        style = "bold" if entry.anchor == active_anchor else None
        table.add_row(marker, entry.anchor, entry.header, style=style)
    return table


def build_distributions_table(distributions: list[str]) -> Table:
    table = Table(title="Distributions")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Distribution", style="cyan")
    for index, distribution in enumerate(distributions, start=1):
        table.add_row(str(index), distribution)
    return table
