"""CLI de desarrollo (`yggauth`).

Por qué existe:
- Permite probar las cinco operaciones contra un servidor real o de staging
  sin escribir código.
- Toda la lógica vive en `core.operations`; aquí solo hay parsing de flags y
  presentación (Rich).
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from adapters.http_client import build_async_client
from cli import doctor
from cli.ui_components import (
    build_error_panel,
    build_profiles_table,
    build_settings_error_panel,
    build_tokens_panel,
    build_user_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import AuthenticateResult, Profile, RefreshResult
from core.errors import YggdrasilError
from core.operations import Authenticate, Invalidate, Operation, Refresh, Signout, Validate

app = typer.Typer(no_args_is_help=True, help="Client for the Yggdrasil authentication server.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override the auth server base URL."),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.001, help="Overall timeout (seconds)."),
    connect_timeout: Optional[float] = typer.Option(
        None, "--connect-timeout", min=0.001, help="Connect timeout (seconds)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before running."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(build_settings_error_panel(exc))
        raise typer.Exit(code=1) from exc
    configure_logging("DEBUG" if verbose else settings.log_level)
    if banner:
        print_banner(_console)
    ctx.obj = {
        "settings": settings,
        "base_url": base_url,
        "timeout": timeout,
        "connect_timeout": connect_timeout,
    }


async def _send(operation: Operation, options: dict[str, Any]) -> Any:
    settings: AppSettings = options["settings"]
    async with build_async_client(settings) as client:
        return await operation.send(
            client,
            base_url=options["base_url"],
            timeout=options["timeout"],
            connect_timeout=options["connect_timeout"],
            settings=settings,
        )


def _run(ctx: typer.Context, operation: Operation) -> Any:
    try:
        return asyncio.run(_send(operation, ctx.obj))
    except YggdrasilError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc


def _print_session(result: AuthenticateResult | RefreshResult) -> None:
    _console.print(build_tokens_panel(result))
    if isinstance(result, AuthenticateResult):
        _console.print(build_profiles_table(result.available_profiles, result.selected_profile))
    else:
        _console.print(build_profiles_table([result.selected_profile], result.selected_profile))
    if result.user is not None:
        _console.print(build_user_table(result.user))


@app.command()
def authenticate(
    ctx: typer.Context,
    username: str = typer.Argument(..., help="Account username or e-mail."),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Account password."),
    client_token: Optional[str] = typer.Option(None, "--client-token", help="Reuse a client token."),
    request_user: bool = typer.Option(False, "--request-user", help="Include the user object."),
) -> None:
    """Log in and print the issued tokens and profiles."""

    operation = Authenticate(username=username, password=password)
    if client_token:
        operation = operation.with_client_token(client_token)
    if request_user:
        operation = operation.with_request_user(True)
    _print_session(_run(ctx, operation))


@app.command()
def refresh(
    ctx: typer.Context,
    access_token: str = typer.Argument(...),
    client_token: str = typer.Argument(...),
    profile_id: Optional[str] = typer.Option(None, "--profile-id", help="Select this profile."),
    profile_name: Optional[str] = typer.Option(None, "--profile-name"),
    request_user: bool = typer.Option(False, "--request-user", help="Include the user object."),
) -> None:
    """Refresh an access token, optionally switching profile."""

    operation = Refresh(access_token=access_token, client_token=client_token)
    if profile_id:
        if not profile_name:
            raise typer.BadParameter("--profile-name is required with --profile-id")
        operation = operation.with_selected_profile(Profile(id=profile_id, name=profile_name))
    if request_user:
        operation = operation.with_request_user(True)
    _print_session(_run(ctx, operation))


@app.command()
def validate(
    ctx: typer.Context,
    access_token: str = typer.Argument(...),
    client_token: str = typer.Argument(...),
) -> None:
    """Check whether an access token is still valid."""

    _run(ctx, Validate(access_token=access_token, client_token=client_token))
    _console.print("[green]Token is valid.[/green]")


@app.command()
def signout(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Invalidate every token of the account."""

    _run(ctx, Signout(username=username, password=password))
    _console.print("[green]Signed out.[/green]")


@app.command()
def invalidate(
    ctx: typer.Context,
    access_token: str = typer.Argument(...),
    client_token: str = typer.Argument(...),
) -> None:
    """Invalidate an access/client token pair."""

    _run(ctx, Invalidate(access_token=access_token, client_token=client_token))
    _console.print("[green]Token invalidated.[/green]")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
