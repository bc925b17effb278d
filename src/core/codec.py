"""Codec JSON entre modelos tipados y bytes wire.

Reglas:
- Los campos opcionales sin valor se omiten (nunca `null`): el servidor
  distingue "ausente" de "null".
- Los nombres en el wire son los alias camelCase de cada modelo.
- Al decodificar se ignoran campos desconocidos; si falta uno obligatorio se
  lanza `DecodeError`.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from core.errors import DecodeError, EncodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


def encode(request: BaseModel) -> bytes:
    """Serializa `request` a JSON compacto UTF-8.

    Determinista: el mismo valor produce siempre los mismos bytes.
    """

    try:
        payload = request.model_dump_json(by_alias=True, exclude_none=True)
    except PydanticSerializationError as exc:
        raise EncodeError(f"Could not serialize {type(request).__name__}: {exc}") from exc
    return payload.encode("utf-8")


def decode(body: bytes, model: type[ModelT], *, status_code: int | None = None) -> ModelT:
    """Valida `body` contra `model`.

    `status_code` solo se usa para enriquecer el `DecodeError`.
    """

    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise DecodeError(
            f"Unexpected {model.__name__} payload: {exc}",
            status_code=status_code,
            body=body,
        ) from exc
