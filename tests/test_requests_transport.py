import pytest
import requests

from nylas_mail.errors import TransportError
from nylas_mail.transport import RequestsTransport


class DummyResponse:
    def __init__(self, status_code: int = 200, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


def test_request_passes_arguments_and_timeout(monkeypatch):
    captured: dict = {}

    def fake_request(self, method, url, **kwargs):
        captured["method"] = method
        captured["url"] = url
        captured.update(kwargs)
        return DummyResponse(201, '{"ok": true}')

    monkeypatch.setattr(requests.Session, "request", fake_request)

    transport = RequestsTransport(timeout=12)
    resp = transport.request(
        "POST",
        "https://api.us.nylas.com/v3/connect/token",
        data={"grant_type": "refresh_token"},
        headers={"Accept": "application/json"},
    )

    assert resp.status_code == 201
    assert resp.ok
    assert resp.json() == {"ok": True}
    assert captured["method"] == "POST"
    assert captured["data"] == {"grant_type": "refresh_token"}
    assert captured["headers"] == {"Accept": "application/json"}
    assert captured["timeout"] == 12


def test_request_exception_becomes_transport_error(monkeypatch):
    def fake_request(self, method, url, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests.Session, "request", fake_request)

    with RequestsTransport() as transport:
        with pytest.raises(TransportError) as excinfo:
            transport.request("GET", "https://api.us.nylas.com/v3/grants/me/messages")

    assert isinstance(excinfo.value.cause, requests.ConnectionError)
    assert excinfo.value.__cause__ is excinfo.value.cause


def test_close_leaves_caller_session_open(monkeypatch):
    closed = {"count": 0}
    session = requests.Session()
    monkeypatch.setattr(session, "close", lambda: closed.__setitem__("count", closed["count"] + 1))

    RequestsTransport(session=session).close()

    assert closed["count"] == 0
