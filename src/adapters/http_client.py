"""Wrapper de httpx: ejecutor de requests hacia el servidor de autenticación.

Por qué un wrapper:
- Estandariza timeouts, headers, User-Agent y redirects para las cinco
  operaciones.
- Facilita testeo: el `httpx.AsyncClient` se inyecta, así que se puede usar un
  `httpx.MockTransport`.

El ejecutor no interpreta status HTTP (eso lo hace `core.classifier`); solo
convierte fallos de red en `TransportError`.
"""

from __future__ import annotations

import asyncio

import httpx
from loguru import logger

from core.config import USER_AGENT, AppSettings
from core.errors import TransportError

JSON_HEADERS = {"Content-Type": "application/json"}


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del cliente.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las operaciones se comporten
      igual cuando el llamador no inyecta su propio cliente.
    """

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=build_timeout(settings.http_timeout_seconds, settings.connect_timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )


def build_timeout(timeout: float, connect_timeout: float) -> httpx.Timeout:
    """Timeouts por fase de httpx; el plazo total lo impone `execute_request`."""

    return httpx.Timeout(timeout, connect=connect_timeout)


def endpoint_url(base_url: str, endpoint: str) -> str:
    return f"{base_url.rstrip('/')}/{endpoint.lstrip('/')}"


async def execute_request(
    client: httpx.AsyncClient,
    *,
    base_url: str,
    endpoint: str,
    payload: bytes,
    timeout: float,
    connect_timeout: float,
) -> tuple[int, bytes]:
    """Hace un único POST JSON y devuelve `(status_code, body)`.

    `timeout` es un plazo total para toda la llamada (conexión, envío y
    lectura del cuerpo); `connect_timeout` limita además la fase de conexión.
    El cuerpo se acumula por chunks en un buffer propio de esta llamada y se
    sella (`bytes`) antes de devolverlo; no hay decodificación en streaming.
    """

    url = endpoint_url(base_url, endpoint)
    request = client.build_request(
        "POST",
        url,
        content=payload,
        headers={**JSON_HEADERS, "User-Agent": USER_AGENT},
        timeout=build_timeout(timeout, connect_timeout),
    )
    logger.debug(f"POST {url} (timeout={timeout}s, connect_timeout={connect_timeout}s)")

    try:
        status_code, body = await asyncio.wait_for(_transfer(client, request), timeout)
    except asyncio.TimeoutError as exc:
        logger.error(f"Transport failure calling {url}: no complete response within {timeout}s")
        raise TransportError(f"Request to {url} exceeded the {timeout}s overall timeout", url=url) from exc
    except httpx.RequestError as exc:
        logger.error(f"Transport failure calling {url}: {exc!r}")
        raise TransportError(f"Request to {url} failed: {exc!r}", url=url) from exc

    logger.debug(f"POST {url} -> HTTP {status_code} ({len(body)} bytes)")
    return status_code, body


async def _transfer(client: httpx.AsyncClient, request: httpx.Request) -> tuple[int, bytes]:
    buffer = bytearray()
    response = await client.send(request, stream=True, follow_redirects=True)
    try:
        async for chunk in response.aiter_bytes():
            buffer.extend(chunk)
    finally:
        await response.aclose()
    return response.status_code, bytes(buffer)
