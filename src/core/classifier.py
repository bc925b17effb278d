"""Clasificación de respuestas: éxito vs. error de dominio.

El status esperado lo fija cada operación (200 o 204). Cualquier otro status es
un fallo: se intenta decodificar el sobre de error del servidor y, si tampoco
encaja, el fallo lleva un `DecodeError` con el status original.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from core.codec import decode
from core.domain.models import ErrorEnvelope
from core.errors import DecodeError, DomainError


@dataclass(frozen=True)
class Outcome:
    """Resultado de clasificar una respuesta.

    - Éxito: `error is None` y `body` pasa a la etapa de decodificación.
    - Fallo: `error` es un `DomainError` o un `DecodeError`.
    """

    status_code: int
    body: bytes
    error: DomainError | DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> bytes:
        """Devuelve el cuerpo si hubo éxito; si no, lanza el error que lleva."""

        if self.error is not None:
            raise self.error
        return self.body


def classify(expected_status: int, actual_status: int, body: bytes) -> Outcome:
    if actual_status == expected_status:
        logger.debug(f"Response classified as success (HTTP {actual_status})")
        return Outcome(status_code=actual_status, body=body)

    try:
        envelope = decode(body, ErrorEnvelope, status_code=actual_status)
    except DecodeError as exc:
        logger.warning(f"Unexpected HTTP {actual_status} with an unreadable error body")
        return Outcome(status_code=actual_status, body=body, error=exc)

    logger.warning(f"Auth server rejected the call: HTTP {actual_status} {envelope.error}")
    return Outcome(
        status_code=actual_status,
        body=body,
        error=DomainError(actual_status, envelope),
    )
