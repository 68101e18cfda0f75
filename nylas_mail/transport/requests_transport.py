from __future__ import annotations

from typing import Any, Mapping

import requests

from nylas_mail.config import DEFAULT_TIMEOUT
from nylas_mail.errors import TransportError
from nylas_mail.logging import get_logger
from nylas_mail.transport.base import HttpResponse

logger = get_logger(__name__)


class RequestsTransport:
    """
    HTTP transport backed by a requests.Session.

    The session is reused across calls so connections are pooled. Pass your own
    session to control adapters, proxies or certificates.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session or requests.Session()
        self._owns_session = session is None
        self.timeout = timeout

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
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method,
                url,
                params=params,
                data=data,
                json=json,
                headers=dict(headers or {}),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc.__class__.__name__)
            raise TransportError(f"{method} {url} failed: {exc}", cause=exc) from exc

        return HttpResponse(status_code=resp.status_code, text=resp.text)

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
