from __future__ import annotations

import json as jsonlib
from dataclasses import dataclass
from typing import Any, Mapping, Protocol


@dataclass(frozen=True, slots=True)
class HttpResponse:
    status_code: int
    text: str = ""

    def json(self) -> Any:
        return jsonlib.loads(self.text)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class HttpTransport(Protocol):
    """Minimal request/response contract the client and mailboxes depend on.

    Implementations raise TransportError when no response could be obtained.
    """

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> HttpResponse:
        ...
