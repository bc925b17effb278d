"""Fixtures compartidas: settings aislados del entorno y transporte simulado."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from core.config import AppSettings

BASE_URL = "https://auth.test"

AUTHENTICATE_BODY = {
    "accessToken": "t1",
    "clientToken": "c1",
    "availableProfiles": [{"id": "1", "name": "Steve"}],
}

REFRESH_BODY = {
    "accessToken": "t2",
    "clientToken": "c1",
    "selectedProfile": {"id": "1", "name": "Steve"},
    "user": {"id": "u1", "properties": [{"name": "preferredLanguage", "value": "en"}]},
}

FORBIDDEN_BODY = {
    "error": "ForbiddenOperationException",
    "errorMessage": "Invalid token",
}


def json_response(status_code: int, payload: object) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


class Recorder:
    """Handler para `httpx.MockTransport` que guarda los requests recibidos."""

    def __init__(self, response: httpx.Response | Callable[[httpx.Request], httpx.Response]) -> None:
        self._response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._response):
            return self._response(request)
        return self._response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last.content)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        auth_base_url=BASE_URL,
        http_timeout_seconds=10.0,
        connect_timeout_seconds=10.0,
    )


@pytest.fixture
def make_client() -> Callable[[Recorder], httpx.AsyncClient]:
    def _make(recorder: Recorder) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(recorder))

    return _make
