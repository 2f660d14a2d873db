"""Command-line interface (Typer).

Commands:
- `panel`: interactive control panel (catalog at startup, overlapping operations).
- `distributions`, `create`, `get`: one-shot versions of the panel operations.
- `smoke`: create an invalidation and immediately fetch it back.
- `doctor`: configuration and connectivity checks.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.prompt import Prompt

from adapters.api_client import InvalidationApiClient
from adapters.json_exporter import export_log_json
from adapters.report_exporter import export_log_html
from cli import doctor
from cli.console_ports import ConsolePorts, ConsoleSelect, RichLogView, build_console_ports
from cli.ui_components import build_distributions_table, print_banner
from core.config import AppSettings
from core.domain.models import LogEntry, OperationState
from core.services.panel import ControlPanel

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Control panel for the CDN invalidation API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_PANEL_HELP = """\
[bold]create[/bold] [DISTRIBUTION PATHS]   submit an invalidation (comma-separated paths)
[bold]get[/bold] [DISTRIBUTION ID]         fetch an invalidation by ID
[bold]distributions[/bold]                 list the distributions loaded at startup
[bold]history[/bold]                       navigation list of the operations
[bold]show[/bold] N|item-N                 show one operation again
[bold]export-html[/bold] PATH / [bold]export-json[/bold] PATH
[bold]help[/bold], [bold]quit[/bold]"""


@dataclass
class CliState:
    settings: AppSettings
    export_html: Path | None = None
    export_json: Path | None = None
    banner: bool = True


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_api(settings: AppSettings) -> InvalidationApiClient:
    return InvalidationApiClient.from_settings(settings)


def _new_panel(
    api: InvalidationApiClient,
    settings: AppSettings,
    ports: ConsolePorts | None = None,
) -> tuple[ControlPanel, RichLogView]:
    view = RichLogView(_console)
    panel = ControlPanel.build(
        api,
        ports if ports is not None else build_console_ports(_console),
        view,
        newest_first=settings.newest_first,
    )
    return panel, view


def _export(state: CliState, panel: ControlPanel) -> None:
    if state.export_html is not None:
        path = export_log_html(log=panel.log, output_path=state.export_html, base_url=state.settings.api_base_url)
        _console.print(f"[green]HTML log saved:[/green] {path}")
    if state.export_json is not None:
        path = export_log_json(log=panel.log, output_path=state.export_json)
        _console.print(f"[green]JSON log saved:[/green] {path}")


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API base URL (overrides CDNVALIDATOR_API_BASE_URL)."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="CRITICAL, ERROR, WARNING, INFO or DEBUG."),
    export_html: Optional[Path] = typer.Option(None, "--export-html", help="Write the operation log as HTML on exit."),
    export_json: Optional[Path] = typer.Option(None, "--export-json", help="Write the operation log as JSON on exit."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    overrides: dict[str, Any] = {}
    if base_url:
        overrides["api_base_url"] = base_url
    if log_level:
        overrides["log_level"] = log_level
    try:
        settings = AppSettings(**overrides)
    except PydanticValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    configure_logging(settings.log_level)
    ctx.obj = CliState(
        settings=settings,
        export_html=export_html,
        export_json=export_json,
        banner=not no_banner,
    )


# One-shot commands


async def _run_distributions(state: CliState) -> bool:
    async with _build_api(state.settings) as api:
        panel, _ = _new_panel(api, state.settings)
        distributions = await panel.start()
        if distributions:
            _console.print(build_distributions_table(distributions))
        _export(state, panel)
        return bool(distributions)


async def _run_create(state: CliState, distribution: str, paths: str) -> bool:
    async with _build_api(state.settings) as api:
        panel, _ = _new_panel(api, state.settings)
        await panel.submit_create(distribution, paths)
        _export(state, panel)
        return panel.create.outcome is OperationState.SUCCEEDED


async def _run_get(state: CliState, distribution: str, invalidation_id: str) -> bool:
    async with _build_api(state.settings) as api:
        panel, _ = _new_panel(api, state.settings)
        await panel.submit_get(distribution, invalidation_id)
        _export(state, panel)
        return panel.get.outcome is OperationState.SUCCEEDED


def _invalidation_id(entry: LogEntry) -> str | None:
    if isinstance(entry.payload, dict):
        value = entry.payload.get("id")
        if isinstance(value, str) and value:
            return value
    return None


async def _run_smoke(state: CliState, distribution: str, paths: str) -> bool:
    async with _build_api(state.settings) as api:
        panel, _ = _new_panel(api, state.settings)
        created = await panel.submit_create(distribution, paths)
        ok = panel.create.outcome is OperationState.SUCCEEDED
        if ok:
            invalidation_id = _invalidation_id(created)
            if invalidation_id is None:
                logger.error("create response carries no invalidation id: %r", created.payload)
                ok = False
            else:
                await panel.submit_get(distribution, invalidation_id)
                ok = panel.get.outcome is OperationState.SUCCEEDED
        _export(state, panel)
        return ok


@app.command()
def distributions(ctx: typer.Context) -> None:
    """List the distributions you may invalidate."""

    if not asyncio.run(_run_distributions(_state(ctx))):
        raise typer.Exit(code=1)


@app.command()
def create(
    ctx: typer.Context,
    distribution: str = typer.Option(..., "--distribution", "-d", help="Distribution name."),
    paths: str = typer.Option(..., "--paths", "-p", help='Comma-separated paths, e.g. "/index.html, /img/*".'),
) -> None:
    """Submit an invalidation request."""

    if not asyncio.run(_run_create(_state(ctx), distribution, paths)):
        raise typer.Exit(code=1)


@app.command()
def get(
    ctx: typer.Context,
    distribution: str = typer.Option(..., "--distribution", "-d", help="Distribution name."),
    invalidation_id: str = typer.Option(..., "--id", "-i", help="Invalidation ID."),
) -> None:
    """Fetch the status of an invalidation."""

    if not asyncio.run(_run_get(_state(ctx), distribution, invalidation_id)):
        raise typer.Exit(code=1)


@app.command()
def smoke(
    ctx: typer.Context,
    distribution: str = typer.Option(..., "--distribution", "-d", help="Distribution name."),
    paths: str = typer.Option(..., "--paths", "-p", help="Comma-separated paths."),
) -> None:
    """Create an invalidation, then fetch it back by the returned ID."""

    if not asyncio.run(_run_smoke(_state(ctx), distribution, paths)):
        raise typer.Exit(code=1)


# Interactive panel


async def _ask(prompt: str, **kwargs: Any) -> str:
    return await asyncio.to_thread(Prompt.ask, prompt, console=_console, **kwargs)


async def _read_target(select: ConsoleSelect, args: str, second: str) -> tuple[str, str] | None:
    """`DISTRIBUTION REST` from the command line, or prompted when missing."""

    distribution, _, rest = args.strip().partition(" ")
    if not distribution:
        kwargs: dict[str, Any] = {}
        if select.options:
            kwargs["choices"] = [value for value, _ in select.options]
            kwargs["default"] = select.get_value()
        distribution = await _ask("Distribution", **kwargs)
        rest = await _ask(second, default="")
    if select.options and not select.has_option(distribution):
        _console.print(f"[yellow]Unknown distribution:[/yellow] {distribution}")
        return None
    return distribution, rest.strip()


def _schedule(tasks: set[asyncio.Task[Any]], coro: Any) -> None:
    task = asyncio.create_task(coro)
    tasks.add(task)
    task.add_done_callback(tasks.discard)


def _show(view: RichLogView, panel: ControlPanel, arg: str) -> None:
    anchor = arg.strip()
    if anchor.isdigit():
        anchor = f"item-{anchor}"
    entry = panel.log.get(anchor)
    if entry is None:
        _console.print(f"[yellow]No such operation:[/yellow] {arg}")
        return
    view.print_entry(entry)


async def _interactive(state: CliState) -> None:
    async with _build_api(state.settings) as api:
        ports = build_console_ports(_console)
        panel, view = _new_panel(api, state.settings, ports)

        await panel.start()
        _console.print(_PANEL_HELP)

        tasks: set[asyncio.Task[Any]] = set()
        while True:
            try:
                line = await asyncio.to_thread(_console.input, "[bold cyan]cdnvalidator>[/bold cyan] ")
            except (EOFError, KeyboardInterrupt):
                break

            command, _, args = line.strip().partition(" ")
            command = command.lower()
            if not command:
                continue
            if command in ("quit", "exit"):
                break
            if command == "help":
                _console.print(_PANEL_HELP)
            elif command == "create":
                if not ports.create_button.enabled:
                    _console.print("[yellow]A create request is already in flight.[/yellow]")
                    continue
                target = await _read_target(ports.create_distribution, args, "Paths")
                if target is not None:
                    _schedule(tasks, panel.submit_create(*target))
            elif command == "get":
                if not ports.get_button.enabled:
                    _console.print("[yellow]A get request is already in flight.[/yellow]")
                    continue
                target = await _read_target(ports.get_distribution, args, "Invalidation ID")
                if target is not None:
                    _schedule(tasks, panel.submit_get(*target))
            elif command == "distributions":
                _console.print(build_distributions_table([v for v, _ in ports.create_distribution.options]))
            elif command == "history":
                view.print_history()
            elif command == "show":
                _show(view, panel, args)
            elif command == "export-html" and args.strip():
                export_log_html(log=panel.log, output_path=Path(args.strip()), base_url=state.settings.api_base_url)
            elif command == "export-json" and args.strip():
                export_log_json(log=panel.log, output_path=Path(args.strip()))
            else:
                _console.print(f"[yellow]Unknown command:[/yellow] {line.strip()} (try `help`)")

        if tasks:
            _console.print(f"[dim]Waiting for {len(tasks)} request(s) in flight...[/dim]")
            await asyncio.gather(*tasks)
        _export(state, panel)


@app.command()
def panel(ctx: typer.Context) -> None:
    """Interactive control panel."""

    state = _state(ctx)
    if state.banner:
        print_banner(_console, base_url=state.settings.api_base_url)
    asyncio.run(_interactive(state))


def run() -> None:
    app()
