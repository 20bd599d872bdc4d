"""Unit tests for the FCM push sender."""

from __future__ import annotations

import pytest
import requests

from app.config import Settings
from app.domain.exceptions import PushConfigurationError
from app.infrastructure import push as push_module


class FakeResponse:
    def __init__(self, status_code: int, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "secret_key": "secret",
        "fcm_project_id": "flashcards-test",
        "fcm_service_account_json": '{"type": "service_account"}',
        "notification_send_timeout_seconds": 3.0,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def configured(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(push_module, "get_settings", lambda: _settings())
    monkeypatch.setattr(push_module, "_access_token", lambda: "access-token")


def _unregistered() -> FakeResponse:
    return FakeResponse(
        404,
        {
            "error": {
                "code": 404,
                "message": "Requested entity was not found.",
                "status": "NOT_FOUND",
                "details": [
                    {
                        "@type": "type.googleapis.com/google.firebase.fcm.v1.FcmError",
                        "errorCode": "UNREGISTERED",
                    }
                ],
            }
        },
    )


def test_send_push_classifies_each_token(monkeypatch: pytest.MonkeyPatch, configured):
    calls = []

    def fake_post(url, headers, json, timeout):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        token = json["message"]["token"]
        if token == "stale":
            return _unregistered()
        if token == "flaky":
            return FakeResponse(503, {"error": {"message": "Unavailable", "status": "UNAVAILABLE"}})
        return FakeResponse(200, {"name": "projects/flashcards-test/messages/1"})

    monkeypatch.setattr(push_module.requests, "post", fake_post)

    results = push_module.send_push(
        ["good", "stale", "flaky", "good"], "Title", "Body", {"type": "motivation", "count": 3}
    )

    assert [result.token for result in results] == ["good", "stale", "flaky"]
    assert [result.status for result in results] == ["sent", "invalid_token", "failed"]
    assert results[1].token_invalid
    assert "503" in results[2].error
    assert calls[0]["url"].endswith("/projects/flashcards-test/messages:send")
    assert calls[0]["headers"]["Authorization"] == "Bearer access-token"
    assert calls[0]["json"]["message"]["data"] == {"type": "motivation", "count": "3"}
    assert calls[0]["timeout"] == 3.0


def test_invalid_argument_on_registration_token_is_invalid(monkeypatch, configured):
    def fake_post(url, headers, json, timeout):
        return FakeResponse(
            400,
            {
                "error": {
                    "message": "The registration token is not a valid FCM registration token",
                    "status": "INVALID_ARGUMENT",
                }
            },
        )

    monkeypatch.setattr(push_module.requests, "post", fake_post)

    (result,) = push_module.send_push(["garbage"], "Title", "Body")

    assert result.status == push_module.PUSH_STATUS_INVALID_TOKEN


def test_timeout_is_a_failure_not_an_invalid_token(monkeypatch, configured):
    def fake_post(url, headers, json, timeout):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(push_module.requests, "post", fake_post)

    (result,) = push_module.send_push(["slow"], "Title", "Body")

    assert result.status == push_module.PUSH_STATUS_FAILED
    assert not result.token_invalid


def test_send_push_requires_project_id(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(push_module, "get_settings", lambda: _settings(fcm_project_id=None))

    assert push_module.is_push_configured() is False
    with pytest.raises(PushConfigurationError):
        push_module.send_push(["token"], "Title", "Body")


def test_send_push_without_tokens_does_nothing(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(push_module, "get_settings", lambda: _settings(fcm_project_id=None))

    assert push_module.send_push([], "Title", "Body") == []
