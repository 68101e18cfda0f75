from __future__ import annotations

from datetime import datetime
from email.utils import getaddresses
from pathlib import Path
from typing import Any, Iterable, Mapping, Self, Union

from nylas_mail.mail.attachments import Attachment
from nylas_mail.mail.models import Participant

# A tuple is read as a (name, email) pair; lists and other iterables as collections.
ParticipantLike = Union[str, tuple[str | None, str], Mapping[str, Any], Participant]
ParticipantInput = Union[ParticipantLike, Iterable[ParticipantLike]]
AttachmentInput = Union[Attachment, str, Path]

_RESERVED_HEADERS = {"from", "to", "cc", "bcc", "subject", "reply-to"}


class SendMessageBuilder:
    """
    Builds the JSON body for the messages/send endpoint.

    Participants are normalized to {"name", "email"} records and de-duplicated
    per field (case-insensitive on the address). Attachments are base64 encoded
    inline.
    """

    def __init__(self) -> None:
        self._from: Participant | None = None
        self._to: list[Participant] = []
        self._cc: list[Participant] = []
        self._bcc: list[Participant] = []
        self._reply_to: list[Participant] = []
        self._subject: str = ""
        self._body: str = ""
        self._attachments: list[Attachment] = []
        self._headers: list[tuple[str, str]] = []
        self._tracking_options: dict[str, Any] | None = None
        self._send_at: int | None = None
        self._reply_to_message_id: str | None = None
        self._use_draft: bool | None = None

    # ---------------
    # Participants
    # ---------------
    def set_from(self, participant: ParticipantInput) -> Self:
        normalized = self._normalize_participants(participant)
        if len(normalized) != 1:
            raise ValueError("Exactly one From address must be provided.")
        self._from = normalized[0]
        return self

    def add_to(self, participants: ParticipantInput) -> Self:
        self._add_participants(self._to, participants)
        return self

    def add_cc(self, participants: ParticipantInput) -> Self:
        self._add_participants(self._cc, participants)
        return self

    def add_bcc(self, participants: ParticipantInput) -> Self:
        self._add_participants(self._bcc, participants)
        return self

    def add_reply_to(self, participants: ParticipantInput) -> Self:
        self._add_participants(self._reply_to, participants)
        return self

    # -------------
    # Content
    # -------------
    def set_subject(self, subject: str) -> Self:
        self._subject = subject or ""
        return self

    def set_body(self, body: str) -> Self:
        self._body = body or ""
        return self

    def add_attachment(
        self,
        attachment: AttachmentInput,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> Self:
        if not isinstance(attachment, Attachment):
            attachment = Attachment.from_path(
                attachment,
                filename=filename,
                content_type=content_type,
            )
        self._attachments.append(attachment)
        return self

    def add_attachment_bytes(
        self,
        content: bytes,
        *,
        filename: str,
        content_type: str | None = None,
    ) -> Self:
        self._attachments.append(
            Attachment.from_bytes(content, filename=filename, content_type=content_type)
        )
        return self

    def add_header(self, name: str, value: str) -> Self:
        if not name:
            raise ValueError("Header name must be provided.")
        if name.lower() in _RESERVED_HEADERS:
            raise ValueError(f"Header '{name}' is managed by the builder and cannot be set manually.")
        self._headers.append((name, str(value)))
        return self

    def add_headers(self, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> Self:
        items = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in items:
            self.add_header(name, value)
        return self

    # -------------
    # Delivery
    # -------------
    def set_tracking_options(self, options: Mapping[str, Any]) -> Self:
        self._tracking_options = dict(options)
        return self

    def set_send_at(self, send_at: int | datetime) -> Self:
        if isinstance(send_at, datetime):
            send_at = int(send_at.timestamp())
        self._send_at = int(send_at)
        return self

    def set_reply_to_message_id(self, message_id: str) -> Self:
        self._reply_to_message_id = message_id
        return self

    def set_use_draft(self, use_draft: bool) -> Self:
        self._use_draft = bool(use_draft)
        return self

    # -------------
    # Build
    # -------------
    def build(self) -> dict[str, Any]:
        self._validate_required_fields()

        payload: dict[str, Any] = {
            "subject": self._subject,
            "body": self._body,
            "from": [self._from.to_dict()],
            "to": [p.to_dict() for p in self._to],
        }
        if self._cc:
            payload["cc"] = [p.to_dict() for p in self._cc]
        if self._bcc:
            payload["bcc"] = [p.to_dict() for p in self._bcc]
        if self._reply_to:
            payload["reply_to"] = [p.to_dict() for p in self._reply_to]
        if self._tracking_options is not None:
            payload["tracking_options"] = self._tracking_options
        if self._send_at is not None:
            payload["send_at"] = self._send_at
        if self._reply_to_message_id is not None:
            payload["reply_to_message_id"] = self._reply_to_message_id
        if self._use_draft is not None:
            payload["use_draft"] = self._use_draft
        if self._attachments:
            payload["attachments"] = [a.to_payload() for a in self._attachments]
        if self._headers:
            payload["custom_headers"] = [
                {"name": name, "value": value} for name, value in self._headers
            ]

        return payload

    # -------------
    # helpers
    # -------------
    def _add_participants(self, target: list[Participant], participants: ParticipantInput) -> None:
        seen = {p.email.lower() for p in target}
        for participant in self._normalize_participants(participants):
            key = participant.email.lower()
            if key in seen:
                continue
            target.append(participant)
            seen.add(key)

    def _normalize_participants(self, participants: ParticipantInput) -> list[Participant]:
        if isinstance(participants, (str, tuple, Mapping, Participant)):
            raw: list[Any] = [participants]
        else:
            raw = list(participants)

        normalized: list[Participant] = []
        seen: set[str] = set()
        for item in raw:
            for participant in self._coerce(item):
                key = participant.email.lower()
                if key in seen:
                    continue
                seen.add(key)
                normalized.append(participant)

        if not normalized:
            raise ValueError("At least one email address is required.")
        return normalized

    def _coerce(self, item: Any) -> list[Participant]:
        if isinstance(item, Participant):
            pairs = [(item.name or "", item.email)]
        elif isinstance(item, Mapping):
            pairs = [(item.get("name") or "", str(item.get("email") or ""))]
        elif isinstance(item, tuple):
            if len(item) != 2:
                raise ValueError(f"Participant tuples must be (name, email), got {item!r}")
            pairs = [(item[0] or "", str(item[1] or ""))]
        elif isinstance(item, str):
            pairs = getaddresses([item])
        else:
            raise TypeError(f"Unsupported participant value: {item!r}")

        result: list[Participant] = []
        for name, addr in pairs:
            addr = addr.strip()
            if not addr:
                continue
            if "@" not in addr:
                raise ValueError(f"Invalid email address: {addr}")
            result.append(Participant(email=addr, name=name.strip() or None))
        return result

    def _validate_required_fields(self) -> None:
        if self._from is None:
            raise ValueError("From address must be set before building a message.")

        if not (self._to or self._cc or self._bcc):
            raise ValueError("At least one recipient (To, Cc, or Bcc) is required.")
