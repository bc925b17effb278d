"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import USER_AGENT, AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    """Any HTTP answer counts as reachable; only transport failures are reported."""

    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.RequestError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Show the effective configuration and check that the auth server is reachable."""

    settings = AppSettings()

    table = Table(title="yggauth Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.auth_base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds}s")
    table.add_row("Connect timeout", "OK", f"{settings.connect_timeout_seconds}s")
    table.add_row("User-Agent", "OK", USER_AGENT)

    ok_http, detail_http = asyncio.run(_check_http(settings.auth_base_url, settings))
    table.add_row("Auth server", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)
    if not ok_http:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    base_url = typer.prompt("Auth base URL", default=settings.auth_base_url, show_default=True).strip()
    timeout = typer.prompt("Timeout (seconds)", default=settings.http_timeout_seconds, type=float)
    connect_timeout = typer.prompt(
        "Connect timeout (seconds)",
        default=settings.connect_timeout_seconds,
        type=float,
    )

    if not base_url:
        raise typer.BadParameter("base_url is required")
    if timeout <= 0 or connect_timeout <= 0:
        raise typer.BadParameter("timeouts must be positive")

    env_path = write_user_env_vars(
        {
            "YGGDRASIL_AUTH_BASE_URL": base_url,
            "YGGDRASIL_HTTP_TIMEOUT_SECONDS": str(timeout),
            "YGGDRASIL_CONNECT_TIMEOUT_SECONDS": str(connect_timeout),
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
