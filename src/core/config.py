"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el ejecutor HTTP y las operaciones lean base URL y timeouts de
  forma consistente.

Prioridad: argumentos por llamada > variables de entorno / `.env` > defaults.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_NAME = "yggdrasil-client"
PACKAGE_VERSION = "0.1.0"
PACKAGE_HOMEPAGE = "https://github.com/yggdrasil-client/yggdrasil-client"

DEFAULT_AUTH_BASE_URL = "https://authserver.mojang.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
USER_AGENT = f"{PACKAGE_NAME}/{PACKAGE_VERSION} ({PACKAGE_HOMEPAGE})"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / PACKAGE_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / PACKAGE_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / PACKAGE_NAME
    return Path.home() / ".config" / PACKAGE_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves existentes que no aparecen en `values` se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# yggdrasil-client user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="YGGDRASIL_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    auth_base_url: str = Field(
        default=DEFAULT_AUTH_BASE_URL,
        min_length=8,
        description="Base URL del servidor de autenticación.",
    )
    http_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout total por request (segundos).",
    )
    connect_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout de conexión por request (segundos).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel mínimo de log para la CLI (loguru).",
    )
