"""Las cinco operaciones del servidor de autenticación.

Cada operación es un modelo inmutable que empareja:
- la forma del request (sus campos),
- el endpoint (`authenticate`, `refresh`, ...),
- el status HTTP de éxito (200 o 204),
- la forma del resultado (`None` si no hay payload).

El pipeline es el mismo para todas (`Operation.send`):
Encode -> Transmit -> Classify -> Decode -> Return, sin reintentos.

Los campos opcionales se rellenan con `with_*`, que devuelven una copia.
"""

from __future__ import annotations

from typing import ClassVar, Generic, TypeVar, cast

import httpx
from loguru import logger
from pydantic import BaseModel, Field, computed_field
from pydantic.config import ConfigDict

from adapters.http_client import build_async_client, execute_request
from core.classifier import classify
from core.codec import decode, encode
from core.config import AppSettings
from core.domain.models import Agent, AuthenticateResult, Profile, RefreshResult

ResultT = TypeVar("ResultT")


class Operation(BaseModel, Generic[ResultT]):
    """Base de las operaciones; implementa `core.interfaces.operation.AuthOperation`."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    endpoint: ClassVar[str]
    expected_status: ClassVar[int]
    result_model: ClassVar[type[BaseModel] | None] = None

    async def send(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        connect_timeout: float | None = None,
        settings: AppSettings | None = None,
    ) -> ResultT:
        """Ejecuta la operación.

        - `client`: transporte inyectado; si falta se crea uno con
          `build_async_client` y se cierra al terminar.
        - `base_url`, `timeout`, `connect_timeout`: sobreescriben `settings`
          solo para esta llamada.

        Lanza `EncodeError`, `TransportError`, `DomainError` o `DecodeError`.
        """

        settings = settings or AppSettings()
        base_url = base_url or settings.auth_base_url
        timeout = timeout if timeout is not None else settings.http_timeout_seconds
        if connect_timeout is None:
            connect_timeout = settings.connect_timeout_seconds

        if client is None:
            async with build_async_client(settings) as owned_client:
                return await self._send(owned_client, base_url, timeout, connect_timeout)
        return await self._send(client, base_url, timeout, connect_timeout)

    async def _send(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        timeout: float,
        connect_timeout: float,
    ) -> ResultT:
        payload = encode(self)
        status_code, body = await execute_request(
            client,
            base_url=base_url,
            endpoint=self.endpoint,
            payload=payload,
            timeout=timeout,
            connect_timeout=connect_timeout,
        )
        body = classify(self.expected_status, status_code, body).unwrap()

        if self.result_model is None:
            logger.debug(f"{self.endpoint}: success, no payload expected")
            return cast(ResultT, None)
        return cast(ResultT, decode(body, self.result_model, status_code=status_code))


class Authenticate(Operation[AuthenticateResult]):
    """Login con usuario y contraseña."""

    endpoint: ClassVar[str] = "authenticate"
    expected_status: ClassVar[int] = 200
    result_model: ClassVar[type[BaseModel] | None] = AuthenticateResult

    username: str
    password: str = Field(..., repr=False)
    client_token: str | None = Field(default=None, alias="clientToken", repr=False)
    request_user: bool | None = Field(default=None, alias="requestUser")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def agent(self) -> Agent:
        """Siempre el cliente de juego, versión 1."""

        return Agent()

    def with_client_token(self, token: str) -> Authenticate:
        return self.model_copy(update={"client_token": token})

    def with_request_user(self, request_user: bool = True) -> Authenticate:
        return self.model_copy(update={"request_user": request_user})


class Refresh(Operation[RefreshResult]):
    """Renueva un access token (opcionalmente cambiando de perfil)."""

    endpoint: ClassVar[str] = "refresh"
    expected_status: ClassVar[int] = 200
    result_model: ClassVar[type[BaseModel] | None] = RefreshResult

    access_token: str = Field(..., alias="accessToken", repr=False)
    client_token: str = Field(..., alias="clientToken", repr=False)
    selected_profile: Profile | None = Field(default=None, alias="selectedProfile")
    request_user: bool | None = Field(default=None, alias="requestUser")

    def with_selected_profile(self, profile: Profile) -> Refresh:
        return self.model_copy(update={"selected_profile": profile})

    def with_request_user(self, request_user: bool = True) -> Refresh:
        return self.model_copy(update={"request_user": request_user})


class Validate(Operation[None]):
    """Comprueba si un access token sigue siendo válido (204 = válido)."""

    endpoint: ClassVar[str] = "validate"
    expected_status: ClassVar[int] = 204

    access_token: str = Field(..., alias="accessToken", repr=False)
    client_token: str = Field(..., alias="clientToken", repr=False)


class Signout(Operation[None]):
    """Invalida todos los tokens de la cuenta usando sus credenciales."""

    endpoint: ClassVar[str] = "signout"
    expected_status: ClassVar[int] = 204

    username: str
    password: str = Field(..., repr=False)


class Invalidate(Operation[None]):
    """Invalida un par access/client token."""

    endpoint: ClassVar[str] = "invalidate"
    expected_status: ClassVar[int] = 204

    access_token: str = Field(..., alias="accessToken", repr=False)
    client_token: str = Field(..., alias="clientToken", repr=False)


ALL_OPERATIONS: tuple[type[Operation], ...] = (
    Authenticate,
    Refresh,
    Validate,
    Signout,
    Invalidate,
)
