"""Contrato de las operaciones del servidor de autenticación.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Una operación = (forma del request, endpoint, status de éxito, forma del
  resultado); el pipeline de envío es común a todas.
"""

from __future__ import annotations

from typing import Any, ClassVar, Protocol, runtime_checkable

import httpx
from pydantic import BaseModel

from core.config import AppSettings


@runtime_checkable
class AuthOperation(Protocol):
    """Contrato mínimo de una operación.

    Reglas de diseño:
    - `send` es asíncrono porque hace I/O (HTTP); el resto es síncrono.
    - `result_model` es `None` cuando la operación no devuelve payload (204).
    """

    endpoint: ClassVar[str]
    expected_status: ClassVar[int]
    result_model: ClassVar[type[BaseModel] | None]

    async def send(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        settings: AppSettings | None = None,
    ) -> Any:
        """Codifica, envía, clasifica y decodifica; devuelve el resultado tipado."""

        ...
