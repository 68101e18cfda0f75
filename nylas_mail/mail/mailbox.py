from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from nylas_mail.auth.grant import Grant
from nylas_mail.errors import ApiError, MalformedResponseError
from nylas_mail.logging import get_logger
from nylas_mail.mail.builder import AttachmentInput, ParticipantInput, SendMessageBuilder
from nylas_mail.mail.enums import Fields
from nylas_mail.mail.models import Confirmation, Message, ScheduledMessage
from nylas_mail.transport.base import HttpResponse, HttpTransport

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 50


class Mailbox(ABC):
    """
    Message operations for a single grant.

    Every operation issues exactly one request, authenticated with the grant's
    access token. Subclasses only decide which grant identifier goes into the
    request path.
    """

    def __init__(self, grant: Grant, *, base_url: str, transport: HttpTransport) -> None:
        self._grant = grant
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def grant(self) -> Grant:
        return self._grant

    @property
    @abstractmethod
    def grant_identifier(self) -> str:
        ...

    # -------------
    # Messages
    # -------------
    def list_messages(
        self,
        limit: int = DEFAULT_PAGE_SIZE,
        page_token: str | None = None,
        select: str | None = None,
        subject: str | None = None,
        any_email: str | None = None,
        to: str | None = None,
        from_: str | None = None,
        cc: str | None = None,
        bcc: str | None = None,
        in_: str | None = None,
        unread: bool | None = None,
        starred: bool | None = None,
        thread_id: str | None = None,
        received_before: int | None = None,
        received_after: int | None = None,
        fields: Fields | str | None = None,
        search_query_native: str | None = None,
    ) -> list[Message]:
        # `from` and `in` are Python keywords
        params = _query(
            limit=limit,
            page_token=page_token,
            select=select,
            subject=subject,
            any_email=any_email,
            to=to,
            **{"from": from_},
            cc=cc,
            bcc=bcc,
            **{"in": in_},
            unread=unread,
            starred=starred,
            thread_id=thread_id,
            received_before=received_before,
            received_after=received_after,
            fields=fields,
            search_query_native=search_query_native,
        )

        data = self._call("GET", "messages", params=params)
        return [Message.from_dict(item) for item in _as_list(data)]

    def get_message(
        self,
        message_id: str,
        fields: Fields | str | None = None,
        select: str | None = None,
    ) -> Message:
        data = self._call(
            "GET",
            f"messages/{_segment(message_id)}",
            params=_query(fields=fields, select=select),
        )
        return Message.from_dict(data)

    def update_message_attributes(
        self,
        message_id: str,
        starred: bool | None = None,
        unread: bool | None = None,
        select: str | None = None,
    ) -> Message:
        body = {
            key: value
            for key, value in (("starred", starred), ("unread", unread))
            if value is not None
        }
        data = self._call(
            "PUT",
            f"messages/{_segment(message_id)}",
            params=_query(select=select),
            json=body,
        )
        return Message.from_dict(data)

    def send_message(
        self,
        subject: str,
        body: str,
        from_: ParticipantInput,
        to: ParticipantInput,
        cc: ParticipantInput | None = None,
        bcc: ParticipantInput | None = None,
        reply_to: ParticipantInput | None = None,
        tracking_options: Mapping[str, Any] | None = None,
        send_at: int | datetime | None = None,
        reply_to_message_id: str | None = None,
        use_draft: bool | None = None,
        attachments: Iterable[AttachmentInput] | None = None,
        custom_headers: Mapping[str, str] | None = None,
    ) -> Message:
        builder = SendMessageBuilder().set_subject(subject).set_body(body)
        builder.set_from(from_)
        builder.add_to(to)
        if cc:
            builder.add_cc(cc)
        if bcc:
            builder.add_bcc(bcc)
        if reply_to:
            builder.add_reply_to(reply_to)
        if tracking_options is not None:
            builder.set_tracking_options(tracking_options)
        if send_at is not None:
            builder.set_send_at(send_at)
        if reply_to_message_id is not None:
            builder.set_reply_to_message_id(reply_to_message_id)
        if use_draft is not None:
            builder.set_use_draft(use_draft)
        for attachment in attachments or []:
            builder.add_attachment(attachment)
        if custom_headers:
            builder.add_headers(custom_headers)

        data = self._call("POST", "messages/send", json=builder.build())
        return Message.from_dict(data)

    # -------------
    # Scheduled messages
    # -------------
    def get_scheduled_messages(self) -> list[ScheduledMessage]:
        data = self._call("GET", "messages/schedules")
        return [ScheduledMessage.from_dict(item) for item in _as_list(data)]

    def get_scheduled_message(self, schedule_id: str) -> ScheduledMessage:
        data = self._call("GET", f"messages/schedules/{_segment(schedule_id)}")
        return ScheduledMessage.from_dict(data)

    def cancel_scheduled_message(self, schedule_id: str) -> Confirmation:
        envelope = self._request("DELETE", f"messages/schedules/{_segment(schedule_id)}")
        return Confirmation.from_envelope(envelope)

    # -------------
    # helpers
    # -------------
    def _url(self, path: str) -> str:
        return f"{self._base_url}/v3/grants/{self.grant_identifier}/{path}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"{self._grant.token_type or 'Bearer'} {self._grant.access_token}",
            "Accept": "application/json",
        }

    def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        envelope = self._request(method, path, **kwargs)
        if "data" not in envelope:
            raise MalformedResponseError(
                f"{method} {path} response is missing required field: data", field="data"
            )
        return envelope["data"]

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        logger.debug("%s %s via %s mailbox", method, path, self.grant.grant_type.value)
        resp = self._transport.request(method, self._url(path), headers=self._headers(), **kwargs)
        envelope = _decode(resp, method, path)

        if not resp.ok:
            raise _api_error(resp.status_code, envelope)

        if not isinstance(envelope, dict):
            raise MalformedResponseError(f"{method} {path} response must be a JSON object")
        return envelope


class OnlineMailbox(Mailbox):
    """Session-scoped mailbox: the access token alone identifies the account."""

    @property
    def grant_identifier(self) -> str:
        return "me"


class OfflineMailbox(Mailbox):
    """Acts on behalf of the specific mailbox the grant was issued for."""

    @property
    def grant_identifier(self) -> str:
        return self._grant.grant_id


def _query(**params: Any) -> dict[str, Any]:
    query: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, Fields):
            value = value.value
        query[key] = value
    return query


def _segment(value: str) -> str:
    # IDs must stay a single path segment.
    return quote(str(value), safe="")


def _as_list(data: Any) -> list[Any]:
    if not isinstance(data, list):
        raise MalformedResponseError("Expected a list in response data", field="data")
    return data


def _decode(resp: HttpResponse, method: str, path: str) -> Any:
    if not resp.text:
        return {}
    try:
        return resp.json()
    except ValueError as exc:
        if not resp.ok:
            return {}
        raise MalformedResponseError(f"{method} {path} returned a non-JSON body") from exc


def _api_error(status_code: int, envelope: Any) -> ApiError:
    error: Mapping[str, Any] = {}
    request_id = None
    if isinstance(envelope, Mapping):
        request_id = envelope.get("request_id")
        if isinstance(envelope.get("error"), Mapping):
            error = envelope["error"]
    logger.warning("Nylas API error %s (request_id=%s)", status_code, request_id)
    return ApiError(
        status_code,
        str(error.get("message") or "Unknown error"),
        error_type=error.get("type"),
        request_id=request_id,
    )
