"""Codec: omisión de opcionales, alias camelCase y errores de decodificación."""

from __future__ import annotations

import json

import pytest
from pydantic import BaseModel, ConfigDict

from conftest import AUTHENTICATE_BODY, REFRESH_BODY
from core.codec import decode, encode
from core.domain.models import AuthenticateResult, ErrorEnvelope, Profile, RefreshResult
from core.errors import DecodeError, EncodeError
from core.operations import Authenticate, Invalidate, Refresh, Signout, Validate


class Opaque:
    pass


class Broken(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    value: Opaque


class TestEncode:
    def test_authenticate_omits_unset_optionals(self):
        payload = json.loads(encode(Authenticate(username="a@b.com", password="secret")))

        assert payload == {
            "agent": {"name": "Minecraft", "version": 1},
            "username": "a@b.com",
            "password": "secret",
        }
        assert "clientToken" not in payload
        assert "requestUser" not in payload

    def test_authenticate_optionals_use_camel_case(self):
        request = (
            Authenticate(username="a@b.com", password="secret")
            .with_client_token("c1")
            .with_request_user(True)
        )
        payload = json.loads(encode(request))

        assert payload["clientToken"] == "c1"
        assert payload["requestUser"] is True

    def test_request_user_false_is_sent_when_set(self):
        payload = json.loads(encode(Authenticate(username="u", password="p").with_request_user(False)))

        assert payload["requestUser"] is False

    def test_refresh_profile_without_legacy_flag(self):
        request = Refresh(access_token="t1", client_token="c1").with_selected_profile(
            Profile(id="1", name="Steve")
        )
        payload = json.loads(encode(request))

        assert payload == {
            "accessToken": "t1",
            "clientToken": "c1",
            "selectedProfile": {"id": "1", "name": "Steve"},
        }

    def test_refresh_legacy_profile(self):
        request = Refresh(access_token="t1", client_token="c1").with_selected_profile(
            Profile.legacy_profile(id="1", name="Notch")
        )
        payload = json.loads(encode(request))

        assert payload["selectedProfile"] == {"id": "1", "name": "Notch", "legacy": True}

    @pytest.mark.parametrize(
        ("request_value", "expected"),
        [
            (Validate(access_token="t1", client_token="c1"), {"accessToken": "t1", "clientToken": "c1"}),
            (Invalidate(access_token="t1", client_token="c1"), {"accessToken": "t1", "clientToken": "c1"}),
            (Signout(username="u", password="p"), {"username": "u", "password": "p"}),
        ],
    )
    def test_token_and_credential_payloads(self, request_value, expected):
        assert json.loads(encode(request_value)) == expected

    def test_encode_is_deterministic(self):
        request = Refresh(access_token="t1", client_token="c1").with_request_user(True)

        assert encode(request) == encode(request)
        assert encode(request) == encode(Refresh(access_token="t1", client_token="c1", request_user=True))

    def test_unserializable_value_raises_encode_error(self):
        with pytest.raises(EncodeError):
            encode(Broken(value=Opaque()))


class TestDecode:
    def test_authenticate_result(self):
        result = decode(json.dumps(AUTHENTICATE_BODY).encode(), AuthenticateResult)

        assert result.access_token == "t1"
        assert result.client_token == "c1"
        assert len(result.available_profiles) == 1
        assert result.available_profiles[0].name == "Steve"
        assert result.available_profiles[0].legacy is None
        assert result.selected_profile is None
        assert result.user is None

    def test_unknown_fields_are_ignored(self):
        body = {**AUTHENTICATE_BODY, "somethingNew": {"nested": True}}

        result = decode(json.dumps(body).encode(), AuthenticateResult)

        assert result.access_token == "t1"

    def test_refresh_result_keeps_property_order(self):
        body = {
            **REFRESH_BODY,
            "user": {
                "id": "u1",
                "properties": [{"name": "b", "value": "2"}, {"name": "a", "value": "1"}],
            },
        }

        result = decode(json.dumps(body).encode(), RefreshResult)

        assert result.selected_profile.id == "1"
        assert [p.name for p in result.user.properties] == ["b", "a"]

    def test_refresh_without_selected_profile_is_a_decode_error(self):
        body = {"accessToken": "t2", "clientToken": "c1"}

        with pytest.raises(DecodeError):
            decode(json.dumps(body).encode(), RefreshResult)

    def test_invalid_json_keeps_status_and_body(self):
        with pytest.raises(DecodeError) as excinfo:
            decode(b"<html>oops</html>", ErrorEnvelope, status_code=502)

        assert excinfo.value.status_code == 502
        assert excinfo.value.body == b"<html>oops</html>"

    def test_empty_body_is_a_decode_error(self):
        with pytest.raises(DecodeError):
            decode(b"", AuthenticateResult)

    def test_encoded_profile_round_trips(self):
        profile = Profile.legacy_profile(id="abc", name="Notch")

        assert decode(encode(profile), Profile) == profile
