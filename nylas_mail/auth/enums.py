from __future__ import annotations

from enum import Enum
from typing import Any


class Provider(str, Enum):
    GOOGLE = "google"
    MICROSOFT = "microsoft"
    ICLOUD = "icloud"
    IMAP = "imap"
    YAHOO = "yahoo"
    EWS = "ews"
    ZOOM = "zoom"

    @classmethod
    def parse(cls, value: Any) -> "Provider | None":
        """Return the matching provider, or None for anything unrecognised.

        New provider strings from the API must not break grant parsing.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class GrantType(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"

    @classmethod
    def from_flow(cls, online: bool) -> "GrantType":
        return cls.ONLINE if online else cls.OFFLINE
