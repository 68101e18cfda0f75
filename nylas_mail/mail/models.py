from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from nylas_mail.errors import MalformedResponseError


def _require(record: Mapping[str, Any], key: str, kind: str) -> Any:
    if not isinstance(record, Mapping):
        raise MalformedResponseError(f"{kind} record must be a JSON object")
    value = record.get(key)
    if value is None:
        raise MalformedResponseError(f"{kind} record is missing required field: {key}", field=key)
    return value


@dataclass(slots=True)
class Participant:
    email: str
    name: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Participant":
        return cls(email=str(data.get("email", "")), name=data.get("name") or None)

    def to_dict(self) -> dict[str, str]:
        if self.name:
            return {"name": self.name, "email": self.email}
        return {"email": self.email}


def _participants(values: Any) -> list[Participant]:
    return [Participant.from_dict(v) for v in values or [] if isinstance(v, Mapping)]


@dataclass(slots=True)
class Message:
    id: str
    grant_id: str | None = None
    thread_id: str | None = None
    subject: str | None = None
    snippet: str | None = None
    body: str | None = None
    from_: list[Participant] = field(default_factory=list)
    to: list[Participant] = field(default_factory=list)
    cc: list[Participant] = field(default_factory=list)
    bcc: list[Participant] = field(default_factory=list)
    reply_to: list[Participant] = field(default_factory=list)
    folders: list[str] = field(default_factory=list)
    date: int | None = None
    unread: bool | None = None
    starred: bool | None = None

    # Set when the message was scheduled with send_at
    schedule_id: str | None = None

    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        message_id = _require(data, "id", "Message")
        return cls(
            id=str(message_id),
            grant_id=data.get("grant_id"),
            thread_id=data.get("thread_id"),
            subject=data.get("subject"),
            snippet=data.get("snippet"),
            body=data.get("body"),
            from_=_participants(data.get("from")),
            to=_participants(data.get("to")),
            cc=_participants(data.get("cc")),
            bcc=_participants(data.get("bcc")),
            reply_to=_participants(data.get("reply_to")),
            folders=list(data.get("folders") or []),
            date=data.get("date"),
            unread=data.get("unread"),
            starred=data.get("starred"),
            schedule_id=data.get("schedule_id"),
            raw=dict(data),
        )


@dataclass(slots=True)
class ScheduledMessage:
    schedule_id: str
    status_code: str | None = None
    status_description: str | None = None
    close_time: int | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScheduledMessage":
        schedule_id = _require(data, "schedule_id", "Scheduled message")
        status = data.get("status")
        if not isinstance(status, Mapping):
            status = {}
        return cls(
            schedule_id=str(schedule_id),
            status_code=status.get("code"),
            status_description=status.get("description"),
            close_time=data.get("close_time"),
            raw=dict(data),
        )


@dataclass(slots=True)
class Confirmation:
    request_id: str | None = None
    message: str | None = None
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_envelope(cls, envelope: Mapping[str, Any]) -> "Confirmation":
        data = envelope.get("data")
        message = data.get("message") if isinstance(data, Mapping) else None
        return cls(
            request_id=envelope.get("request_id"),
            message=message,
            raw=dict(envelope),
        )
