"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.api_client import InvalidationApiClient
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import PanelError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with InvalidationApiClient.from_settings(settings) as api:
            distributions = await api.list_distributions()
        return True, f"{len(distributions)} distribution(s)"
    except PanelError as exc:
        return False, f"{type(exc).__name__}: {exc.message}"


def _settings(ctx: typer.Context) -> AppSettings:
    """Settings resolved by the global options, or a fresh load."""

    settings = getattr(ctx.obj, "settings", None)
    return settings if settings is not None else AppSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings(ctx)

    table = Table(title="CDN Validator Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("API prefix", "OK", settings.api_prefix)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    # Connectivity
    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("Catalog endpoint", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] set CDNVALIDATOR_API_BASE_URL or run `doctor setup-api` "
            "to point the panel at the right server."
        )
        raise typer.Exit(code=1)


@app.command(name="setup-api")
def setup_api(ctx: typer.Context) -> None:
    """Interactive API setup (stores config in the user config .env)."""

    settings = _settings(ctx)

    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    timeout = typer.prompt(
        "Request timeout (seconds)",
        default=f"{settings.http_timeout_seconds:g}",
        show_default=True,
    ).strip()

    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")
    try:
        if float(timeout) <= 0:
            raise ValueError(timeout)
    except ValueError as exc:
        raise typer.BadParameter("timeout must be a positive number") from exc

    env_path = write_user_env_vars(
        {
            "CDNVALIDATOR_API_BASE_URL": base_url,
            "CDNVALIDATOR_HTTP_TIMEOUT_SECONDS": timeout,
        }
    )

    _console.print(f"[green]Saved API config to:[/green] {env_path}")
