from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_TIMEOUT = 30.0

_ENV_KEYS = {
    "base_url": "NYLAS_API_URI",
    "client_id": "NYLAS_CLIENT_ID",
    "client_secret": "NYLAS_CLIENT_SECRET",
    "callback_url": "NYLAS_CALLBACK_URL",
    "timeout": "NYLAS_TIMEOUT",
}


@dataclass(frozen=True, slots=True)
class NylasConfig:
    base_url: str
    client_id: str
    client_secret: str
    callback_url: str

    # Passed through to the HTTP transport
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        for name in ("base_url", "client_id", "client_secret", "callback_url"):
            if not getattr(self, name):
                raise ValueError(f"Missing required Nylas config field: {name}")
        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_mapping(
        cls, config: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> "NylasConfig":
        data: dict[str, Any] = {}
        if config:
            data.update(config)
        data.update({k: v for k, v in kwargs.items() if v is not None})

        timeout_value = data.get("timeout")

        return cls(
            base_url=str(data.get("base_url") or data.get("api_uri") or ""),
            client_id=str(data.get("client_id") or ""),
            client_secret=str(data.get("client_secret") or ""),
            callback_url=str(
                data.get("callback_url")
                or data.get("callback")
                or data.get("redirect_uri")
                or ""
            ),
            timeout=float(timeout_value) if timeout_value is not None else DEFAULT_TIMEOUT,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "NylasConfig":
        env = os.environ if environ is None else environ
        return cls.from_mapping(
            {field: env.get(key) for field, key in _ENV_KEYS.items() if env.get(key)}
        )
