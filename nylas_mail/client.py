from __future__ import annotations

from typing import Any, Mapping

from nylas_mail.auth.grant import Grant
from nylas_mail.config import NylasConfig
from nylas_mail.errors import MalformedResponseError, UnsuccessfulTokenExchangeError
from nylas_mail.logging import get_logger
from nylas_mail.mail.factory import MailboxFactory
from nylas_mail.mail.mailbox import Mailbox
from nylas_mail.transport.base import HttpResponse, HttpTransport
from nylas_mail.transport.requests_transport import RequestsTransport

logger = get_logger(__name__)

AUTH_PATH = "/v3/connect/auth"
TOKEN_PATH = "/v3/connect/token"
CODE_VERIFIER = "nylas"


class NylasClient:
    def __init__(
        self,
        config: NylasConfig | Mapping[str, Any] | None = None,
        *,
        transport: HttpTransport | None = None,
        **config_kwargs: Any,
    ) -> None:
        if isinstance(config, NylasConfig):
            if config_kwargs:
                raise ValueError("Pass either a NylasConfig or config keyword arguments, not both.")
            self.config = config
        else:
            self.config = NylasConfig.from_mapping(config, **config_kwargs)

        self._owns_transport = transport is None
        self.transport: HttpTransport = transport or RequestsTransport(timeout=self.config.timeout)

    def close(self) -> None:
        # Injected transports belong to the caller.
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "NylasClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_oauth_url(self, online: bool = True) -> str:
        """Return the hosted authorization URL the user should be redirected to.

        Values are joined as-is, so client_id and callback_url must already be URL-safe.
        """
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.callback_url,
            "response_type": "code",
            "access_type": "online" if online else "offline",
        }
        query_string = "&".join(f"{k}={v}" for k, v in params.items())
        return f"{self.config.base_url}{AUTH_PATH}?{query_string}"

    def exchange_token(self, token: str, online: bool = True) -> Grant:
        """Exchange an authorization code (online) or a refresh token (offline) for a Grant.

        The grant type comes from `online`, never from the response.
        """
        if online:
            data = {
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "grant_type": "authorization_code",
                "code": token,
                "redirect_uri": self.config.callback_url,
                "code_verifier": CODE_VERIFIER,
            }
        else:
            data = {
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "grant_type": "refresh_token",
                "refresh_token": token,
            }

        flow = data["grant_type"]
        logger.info("Token exchange started (flow=%s)", flow)

        resp = self.transport.request(
            "POST",
            f"{self.config.base_url}{TOKEN_PATH}",
            data=data,
            headers={"Accept": "application/json"},
        )

        if resp.status_code != 200:
            body = self._decode_error_body(resp)
            logger.warning(
                "Token exchange failed (flow=%s, status=%s, error_code=%s)",
                flow,
                resp.status_code,
                body.get("error_code"),
            )
            raise UnsuccessfulTokenExchangeError(
                body.get("error_description") or "Unknown error",
                body.get("error_code"),
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise MalformedResponseError("Token endpoint returned a non-JSON body") from exc

        grant = Grant.from_response(body, online)
        logger.info(
            "Token exchange succeeded (flow=%s, grant_id=%s, provider=%s)",
            flow,
            grant.grant_id,
            grant.provider.value if grant.provider else None,
        )
        return grant

    def refresh(self, grant: Grant) -> Grant:
        if not grant.refresh_token:
            raise ValueError("Grant has no refresh token; request offline access to obtain one.")
        return self.exchange_token(grant.refresh_token, online=False)

    def mailbox(self, grant: Grant) -> Mailbox:
        return MailboxFactory.create(
            grant,
            base_url=self.config.base_url,
            transport=self.transport,
        )

    def _decode_error_body(self, resp: HttpResponse) -> dict[str, Any]:
        try:
            body = resp.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
