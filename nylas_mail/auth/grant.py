from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from nylas_mail.auth.enums import GrantType, Provider
from nylas_mail.errors import MalformedResponseError

REQUIRED_FIELDS = (
    "access_token",
    "expires_in",
    "id_token",
    "email",
    "scopes",
    "token_type",
    "grant_id",
)

STRING_FIELDS = tuple(field for field in REQUIRED_FIELDS if field != "expires_in")


def _parse_expires_in(value: Any) -> int:
    # Whole seconds only: an int (never a bool) or a string of digits.
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    raise MalformedResponseError(
        f"Token response has an invalid expires_in: {value!r}", field="expires_in"
    )


@dataclass(frozen=True, slots=True)
class Grant:
    """
    Result of a completed token exchange.

    - `grant_type` records which flow produced the grant, not anything the
      server returned.
    - `refresh_token` is only present when offline access was requested.
    - `provider` is None when the API reports a provider this package does
      not know about.
    """

    access_token: str
    expires_in: int
    id_token: str
    email: str
    scopes: tuple[str, ...]
    token_type: str
    grant_id: str
    grant_type: GrantType
    refresh_token: str | None = None
    provider: Provider | None = None

    @classmethod
    def from_response(cls, response: Mapping[str, Any], online: bool) -> "Grant":
        if not isinstance(response, Mapping):
            raise MalformedResponseError(
                f"Token response must be a JSON object, got {type(response).__name__}"
            )

        for field in REQUIRED_FIELDS:
            if field not in response or response[field] is None:
                raise MalformedResponseError(
                    f"Token response is missing required field: {field}", field=field
                )

        for field in STRING_FIELDS:
            if not isinstance(response[field], str):
                raise MalformedResponseError(
                    f"Token response field {field} must be a string, "
                    f"got {type(response[field]).__name__}",
                    field=field,
                )

        if not response["access_token"]:
            raise MalformedResponseError(
                "Token response has an empty access_token", field="access_token"
            )

        return cls(
            access_token=response["access_token"],
            expires_in=_parse_expires_in(response["expires_in"]),
            id_token=response["id_token"],
            email=response["email"],
            scopes=tuple(response["scopes"].split(" ")),
            token_type=response["token_type"],
            grant_id=response["grant_id"],
            grant_type=GrantType.from_flow(online),
            refresh_token=response.get("refresh_token"),
            provider=Provider.parse(response.get("provider")),
        )

    def is_token_expired(self) -> bool:
        # Compares the lifetime reported at exchange time; no clock involved.
        return self.expires_in == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "expires_in": self.expires_in,
            "id_token": self.id_token,
            "email": self.email,
            "refresh_token": self.refresh_token,
            "scopes": list(self.scopes),
            "token_type": self.token_type,
            "grant_id": self.grant_id,
            "provider": self.provider.value if self.provider else None,
            "grant_type": self.grant_type.value,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __repr__(self) -> str:
        provider = self.provider.value if self.provider else None
        return (
            f"Grant(grant_id={self.grant_id!r}, email={self.email!r}, "
            f"provider={provider!r}, grant_type={self.grant_type.value!r}, "
            f"expires_in={self.expires_in!r}, access_token='***')"
        )
