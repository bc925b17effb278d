"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los alias (`accessToken`, `availableProfiles`, ...) fijan el formato wire
  camelCase mientras el código Python usa snake_case.

Nota:
- Estos modelos describen *qué* devuelve el servidor de autenticación, no
  *cómo* se obtiene.
- Todos son inmutables (`frozen=True`) y toleran campos desconocidos.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

GAME_AGENT_NAME = "Minecraft"
GAME_AGENT_VERSION = 1


class WireModel(BaseModel):
    """Base común: inmutable, ignora extras y acepta nombres Python o alias."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class Profile(WireModel):
    """Perfil de juego seleccionable (identidad dentro de la cuenta)."""

    id: str = Field(
        ...,
        description="Identificador del perfil (UUID sin guiones).",
    )
    name: str = Field(
        ...,
        description="Nombre visible del perfil.",
    )
    legacy: bool | None = Field(
        default=None,
        description="Solo presente (true) en cuentas legacy; se omite si no aplica.",
    )

    @classmethod
    def legacy_profile(cls, id: str, name: str) -> Profile:
        """Atajo para un perfil marcado como legacy (`legacy=True`)."""

        return cls(id=id, name=name, legacy=True)


class Property(WireModel):
    name: str = Field(..., description="Clave de la propiedad.")
    value: str = Field(..., description="Valor opaco de la propiedad.")


class User(WireModel):
    id: str = Field(..., description="Identificador de la cuenta.")
    properties: list[Property] = Field(
        ...,
        description="Propiedades de la cuenta, en el orden recibido.",
    )


class Agent(WireModel):
    """Agente que se envía en `authenticate` (cliente de juego + versión)."""

    name: str = Field(default=GAME_AGENT_NAME)
    version: int = Field(default=GAME_AGENT_VERSION)


class AuthenticateResult(WireModel):
    """Respuesta de `/authenticate`."""

    access_token: str = Field(..., alias="accessToken")
    client_token: str = Field(..., alias="clientToken")
    available_profiles: list[Profile] = Field(
        ...,
        alias="availableProfiles",
        description="Perfiles disponibles en la cuenta.",
    )
    selected_profile: Profile | None = Field(
        default=None,
        alias="selectedProfile",
        description="Perfil activo si la cuenta tiene uno.",
    )
    user: User | None = Field(
        default=None,
        description="Solo presente cuando se pidió `requestUser`.",
    )


class RefreshResult(WireModel):
    """Respuesta de `/refresh`.

    A diferencia de `AuthenticateResult`, un refresh siempre resuelve a un
    único perfil: `selectedProfile` es obligatorio.
    """

    access_token: str = Field(..., alias="accessToken")
    client_token: str = Field(..., alias="clientToken")
    selected_profile: Profile = Field(..., alias="selectedProfile")
    user: User | None = Field(default=None)


class ErrorEnvelope(WireModel):
    """Sobre de error que devuelve el servidor cuando rechaza una llamada."""

    error: str = Field(
        ...,
        description="Código corto (p.ej. 'ForbiddenOperationException').",
    )
    error_message: str = Field(
        ...,
        alias="errorMessage",
        description="Mensaje legible para humanos.",
    )
    cause: str | None = Field(default=None)
