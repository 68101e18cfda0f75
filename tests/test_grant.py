import json
from dataclasses import FrozenInstanceError

import pytest

from nylas_mail.auth import Grant, GrantType, Provider
from nylas_mail.errors import MalformedResponseError


def _response(**overrides):
    data = {
        "access_token": "tok1",
        "expires_in": 3600,
        "id_token": "idt",
        "email": "a@b.com",
        "scopes": "a b c",
        "token_type": "Bearer",
        "grant_id": "g1",
        "provider": "google",
    }
    data.update(overrides)
    return data


def test_from_response_populates_fields():
    grant = Grant.from_response(_response(refresh_token="rt"), online=True)

    assert grant.access_token == "tok1"
    assert grant.expires_in == 3600
    assert grant.id_token == "idt"
    assert grant.email == "a@b.com"
    assert grant.refresh_token == "rt"
    assert grant.scopes == ("a", "b", "c")
    assert grant.token_type == "Bearer"
    assert grant.grant_id == "g1"
    assert grant.provider is Provider.GOOGLE
    assert grant.grant_type is GrantType.ONLINE


def test_grant_type_follows_flow_flag_not_response():
    online = Grant.from_response(_response(grant_type="offline"), online=True)
    offline = Grant.from_response(_response(grant_type="online"), online=False)

    assert online.grant_type is GrantType.ONLINE
    assert offline.grant_type is GrantType.OFFLINE


def test_refresh_token_defaults_to_none():
    assert Grant.from_response(_response(), online=True).refresh_token is None


@pytest.mark.parametrize("expires_in, expired", [(0, True), (1, False), (3600, False)])
def test_is_token_expired_checks_literal_zero(expires_in, expired):
    grant = Grant.from_response(_response(expires_in=expires_in), online=True)
    assert grant.is_token_expired() is expired


def test_empty_scope_string_yields_single_empty_scope():
    grant = Grant.from_response(_response(scopes=""), online=True)
    assert grant.scopes == ("",)


@pytest.mark.parametrize(
    "field",
    ["access_token", "expires_in", "id_token", "email", "scopes", "token_type", "grant_id"],
)
def test_missing_required_field_raises(field):
    data = _response()
    del data[field]

    with pytest.raises(MalformedResponseError) as excinfo:
        Grant.from_response(data, online=True)

    assert excinfo.value.field == field


def test_non_integer_expires_in_raises():
    with pytest.raises(MalformedResponseError):
        Grant.from_response(_response(expires_in="soon"), online=True)


@pytest.mark.parametrize("value", ["unknown-provider", "", "null", None, 42])
def test_unknown_provider_is_none(value):
    grant = Grant.from_response(_response(provider=value), online=True)
    assert grant.provider is None


def test_missing_provider_is_none():
    data = _response()
    del data["provider"]
    assert Grant.from_response(data, online=False).provider is None


@pytest.mark.parametrize("member", list(Provider))
def test_provider_parse_known_values(member):
    assert Provider.parse(member.value) is member


def test_to_dict_keeps_every_field():
    data = _response()
    del data["provider"]
    grant = Grant.from_response(data, online=False)

    result = grant.to_dict()

    assert result == {
        "access_token": "tok1",
        "expires_in": 3600,
        "id_token": "idt",
        "email": "a@b.com",
        "refresh_token": None,
        "scopes": ["a", "b", "c"],
        "token_type": "Bearer",
        "grant_id": "g1",
        "provider": None,
        "grant_type": "offline",
    }
    assert " ".join(result["scopes"]) == data["scopes"]


def test_to_json_matches_to_dict():
    grant = Grant.from_response(_response(refresh_token="rt"), online=True)
    assert json.loads(grant.to_json()) == grant.to_dict()


def test_grant_is_immutable():
    grant = Grant.from_response(_response(), online=True)
    with pytest.raises(FrozenInstanceError):
        grant.access_token = "other"


def test_repr_masks_tokens():
    grant = Grant.from_response(_response(refresh_token="secret-refresh"), online=True)
    text = repr(grant)

    assert "tok1" not in text
    assert "secret-refresh" not in text
    assert "g1" in text


def test_empty_access_token_raises():
    with pytest.raises(MalformedResponseError) as excinfo:
        Grant.from_response(_response(access_token=""), online=True)

    assert excinfo.value.field == "access_token"


@pytest.mark.parametrize("value", [0.9, 3600.0, -1, True, "", "12s", "-5"])
def test_invalid_expires_in_raises(value):
    with pytest.raises(MalformedResponseError) as excinfo:
        Grant.from_response(_response(expires_in=value), online=True)

    assert excinfo.value.field == "expires_in"


def test_digit_string_expires_in_is_accepted():
    grant = Grant.from_response(_response(expires_in="3600"), online=True)
    assert grant.expires_in == 3600
    assert grant.is_token_expired() is False


def test_non_string_scopes_raises():
    with pytest.raises(MalformedResponseError) as excinfo:
        Grant.from_response(_response(scopes=["a", "b"]), online=True)

    assert excinfo.value.field == "scopes"


@pytest.mark.parametrize("field", ["access_token", "id_token", "email", "token_type", "grant_id"])
def test_non_string_required_field_raises(field):
    with pytest.raises(MalformedResponseError) as excinfo:
        Grant.from_response(_response(**{field: 123}), online=True)

    assert excinfo.value.field == field
