"""Errores del cliente.

Cuatro tipos, uno por etapa del pipeline:
- `EncodeError`: el request no se pudo serializar (error de programación).
- `TransportError`: fallo por debajo de HTTP (DNS, TLS, timeout, conexión).
- `DomainError`: el servidor rechazó la llamada con su sobre de error.
- `DecodeError`: la respuesta no encaja con la forma esperada.

Ninguno se reintenta ni se silencia dentro del Core.
"""

from __future__ import annotations

from core.domain.models import ErrorEnvelope


class YggdrasilError(Exception):
    """Base de todos los errores del cliente."""


class EncodeError(YggdrasilError):
    pass


class TransportError(YggdrasilError):
    """Fallo de red; siempre fatal para la llamada en curso."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class DomainError(YggdrasilError):
    """El servidor rechazó explícitamente la llamada (credenciales, token...)."""

    def __init__(self, status_code: int, envelope: ErrorEnvelope) -> None:
        super().__init__(f"Auth server error ({status_code}): {envelope.error_message}")
        self.status_code = status_code
        self.envelope = envelope

    @property
    def error(self) -> str:
        return self.envelope.error

    @property
    def error_message(self) -> str:
        return self.envelope.error_message

    @property
    def cause(self) -> str | None:
        return self.envelope.cause


class DecodeError(YggdrasilError):
    """La respuesta no es el JSON esperado (ni resultado ni sobre de error).

    Conserva el status HTTP (si se conoce) y el cuerpo crudo para diagnóstico.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: bytes = b"",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
