from datetime import datetime, timezone

import pytest

from nylas_mail.mail import Participant, SendMessageBuilder


def test_build_basic_payload():
    payload = (
        SendMessageBuilder()
        .set_from("sender@example.com")
        .add_to(["one@example.com", "Two <two@example.com>"])
        .set_subject("Hello")
        .set_body("hi there")
        .build()
    )

    assert payload == {
        "subject": "Hello",
        "body": "hi there",
        "from": [{"email": "sender@example.com"}],
        "to": [{"email": "one@example.com"}, {"name": "Two", "email": "two@example.com"}],
    }


def test_recipients_are_deduplicated_across_calls():
    payload = (
        SendMessageBuilder()
        .set_from(Participant(email="sender@example.com", name="Sender"))
        .add_to("a@example.com")
        .add_to(["A@example.com", "b@example.com"])
        .build()
    )

    assert payload["from"] == [{"name": "Sender", "email": "sender@example.com"}]
    assert [p["email"] for p in payload["to"]] == ["a@example.com", "b@example.com"]


def test_optional_delivery_fields():
    send_at = datetime(2030, 1, 1, tzinfo=timezone.utc)
    payload = (
        SendMessageBuilder()
        .set_from("sender@example.com")
        .add_bcc("hidden@example.com")
        .add_reply_to("replies@example.com")
        .set_send_at(send_at)
        .set_reply_to_message_id("msg-1")
        .set_use_draft(False)
        .add_attachment_bytes(b"data", filename="a.csv", content_type="text/csv")
        .build()
    )

    assert payload["to"] == []
    assert payload["bcc"] == [{"email": "hidden@example.com"}]
    assert payload["reply_to"] == [{"email": "replies@example.com"}]
    assert payload["send_at"] == int(send_at.timestamp())
    assert payload["reply_to_message_id"] == "msg-1"
    assert payload["use_draft"] is False
    assert payload["attachments"][0]["content_type"] == "text/csv"


def test_reserved_headers_are_rejected():
    with pytest.raises(ValueError):
        SendMessageBuilder().add_header("Subject", "nope")

    with pytest.raises(ValueError):
        SendMessageBuilder().add_header("", "empty")


def test_missing_attachment_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        SendMessageBuilder().add_attachment(tmp_path / "missing.pdf")


def test_invalid_or_missing_participants_raise():
    with pytest.raises(ValueError):
        SendMessageBuilder().add_to("not-an-address")

    with pytest.raises(ValueError):
        SendMessageBuilder().set_from(["a@example.com", "b@example.com"])

    with pytest.raises(ValueError):
        SendMessageBuilder().add_to("a@example.com").build()

    with pytest.raises(ValueError):
        SendMessageBuilder().set_from("sender@example.com").build()
