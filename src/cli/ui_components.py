"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import ValidationError
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AuthenticateResult, Profile, RefreshResult, User
from core.errors import DecodeError, DomainError, TransportError, YggdrasilError


def print_banner(console: Console) -> None:
    title = Text("yggauth", style="bold cyan")
    subtitle = Text("authenticate • refresh • validate • signout • invalidate", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_profiles_table(profiles: Iterable[Profile], selected: Profile | None = None) -> Table:
    """Tabla de perfiles; marca el seleccionado (si lo hay)."""

    table = Table(title="Profiles")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Legacy", style="yellow")
    table.add_column("Selected", style="green")
    for profile in profiles:
        is_selected = selected is not None and selected.id == profile.id
        table.add_row(
            profile.id,
            profile.name,
            "yes" if profile.legacy else "",
            "*" if is_selected else "",
        )
    return table


def build_user_table(user: User) -> Table:
    table = Table(title=f"User {user.id}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for prop in user.properties:
        table.add_row(prop.name, prop.value)
    return table


def build_tokens_panel(result: AuthenticateResult | RefreshResult) -> Panel:
    body = Text()
    body.append("Access token: ", style="bold")
    body.append(result.access_token + "\n")
    body.append("Client token: ", style="bold")
    body.append(result.client_token)
    return Panel(body, title=Text("Tokens", style="bold green"), border_style="green")


def build_error_panel(exc: YggdrasilError) -> Panel:
    """Panel rojo con el tipo de error y los detalles útiles para diagnóstico."""

    body = Text()
    if isinstance(exc, DomainError):
        title = f"Auth server error (HTTP {exc.status_code})"
        body.append(f"{exc.error}\n", style="bold")
        body.append(exc.error_message)
        if exc.cause:
            body.append(f"\nCause: {exc.cause}", style="dim")
    elif isinstance(exc, DecodeError):
        title = "Unexpected response"
        if exc.status_code is not None:
            body.append(f"HTTP {exc.status_code}\n", style="bold")
        body.append(str(exc))
    elif isinstance(exc, TransportError):
        title = "Network error"
        body.append(str(exc))
    else:
        title = "Error"
        body.append(str(exc))
    return Panel(body, title=Text(title, style="bold red"), border_style="red")


def build_settings_error_panel(exc: ValidationError) -> Panel:
    """Panel rojo con cada variable de configuración inválida."""

    body = Text()
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        body.append(f"YGGDRASIL_{field.upper()}", style="bold")
        body.append(f": {error['msg']}\n")
    return Panel(body, title=Text("Invalid configuration", style="bold red"), border_style="red")
