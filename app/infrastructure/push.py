"""Push notification delivery through the FCM HTTP v1 API."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import requests
from google.auth.transport.requests import Request as GoogleAuthRequest
from google.oauth2 import service_account

from app.config import get_settings
from app.domain.exceptions import PushConfigurationError

logger = logging.getLogger(__name__)

FCM_SCOPES = ("https://www.googleapis.com/auth/firebase.messaging",)
FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"

PUSH_STATUS_SENT = "sent"
PUSH_STATUS_INVALID_TOKEN = "invalid_token"
PUSH_STATUS_FAILED = "failed"

_INVALID_TOKEN_ERROR_CODES = frozenset({"UNREGISTERED"})


@dataclass(frozen=True)
class PushResult:
    """Outcome of delivering one push message to one device token."""

    token: str
    status: str
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == PUSH_STATUS_SENT

    @property
    def token_invalid(self) -> bool:
        return self.status == PUSH_STATUS_INVALID_TOKEN


def _load_service_account_info() -> dict[str, Any] | None:
    settings = get_settings()
    raw = (settings.fcm_service_account_json or "").strip()
    if raw:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PushConfigurationError("FCM_SERVICE_ACCOUNT_JSON is not valid JSON") from exc

    path = (settings.fcm_service_account_path or "").strip()
    if path:
        account_file = Path(path)
        if not account_file.is_file():
            raise PushConfigurationError(f"FCM service account file not found: {path}")
        with account_file.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    return None


def is_push_configured() -> bool:
    """Return ``True`` when an FCM project and service account are configured."""

    settings = get_settings()
    return bool(
        (settings.fcm_project_id or "").strip()
        and (
            (settings.fcm_service_account_json or "").strip()
            or (settings.fcm_service_account_path or "").strip()
        )
    )


@lru_cache(maxsize=1)
def _get_credentials() -> service_account.Credentials:
    info = _load_service_account_info()
    if info is None:
        raise PushConfigurationError(
            "FCM configuration incomplete: set FCM_SERVICE_ACCOUNT_JSON or FCM_SERVICE_ACCOUNT_PATH"
        )
    return service_account.Credentials.from_service_account_info(info, scopes=FCM_SCOPES)


def _access_token() -> str:
    """Return a valid OAuth2 access token for the FCM API."""

    credentials = _get_credentials()
    if not credentials.valid:
        credentials.refresh(GoogleAuthRequest())
    return credentials.token


def _build_message(
    token: str, title: str, body: str, data: Mapping[str, Any] | None
) -> dict[str, Any]:
    return {
        "message": {
            "token": token,
            "notification": {"title": title, "body": body},
            # FCM only accepts string values in the data payload.
            "data": {str(key): str(value) for key, value in (data or {}).items()},
            "android": {
                "priority": "high",
                "notification": {"sound": "default", "channel_id": "default"},
            },
            "apns": {"payload": {"aps": {"sound": "default", "badge": 1}}},
        }
    }


def _extract_fcm_error(response: requests.Response) -> tuple[str | None, str]:
    """Return the FCM ``errorCode`` (if any) and a readable message."""

    try:
        payload = response.json()
    except ValueError:
        return None, (response.text or "")[:1000] or f"HTTP {response.status_code}"

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return None, json.dumps(payload)[:1000]

    message = str(error.get("message") or error.get("status") or f"HTTP {response.status_code}")
    error_code = None
    for detail in error.get("details") or []:
        if isinstance(detail, dict) and detail.get("errorCode"):
            error_code = str(detail["errorCode"])
            break
    return error_code or error.get("status"), message


def _classify_failure(response: requests.Response) -> tuple[str, str]:
    error_code, message = _extract_fcm_error(response)
    if response.status_code == 404 or error_code in _INVALID_TOKEN_ERROR_CODES:
        return PUSH_STATUS_INVALID_TOKEN, message
    if error_code == "INVALID_ARGUMENT" and "registration token" in message.lower():
        return PUSH_STATUS_INVALID_TOKEN, message
    return PUSH_STATUS_FAILED, f"FCM responded with status {response.status_code}: {message}"


def _send_one(
    url: str,
    access_token: str,
    token: str,
    title: str,
    body: str,
    data: Mapping[str, Any] | None,
    timeout: float,
) -> PushResult:
    try:
        response = requests.post(
            url,
            headers={"Authorization": f"Bearer {access_token}"},
            json=_build_message(token, title, body, data),
            timeout=timeout,
        )
    except requests.Timeout:
        logger.warning("FCM request timed out for token %s...", token[:8])
        return PushResult(token=token, status=PUSH_STATUS_FAILED, error="FCM request timed out")
    except requests.RequestException as exc:
        logger.error("FCM request failed for token %s...: %s", token[:8], exc)
        return PushResult(token=token, status=PUSH_STATUS_FAILED, error=str(exc))

    if 200 <= response.status_code < 300:
        return PushResult(token=token, status=PUSH_STATUS_SENT)

    status, message = _classify_failure(response)
    if status == PUSH_STATUS_INVALID_TOKEN:
        logger.info("FCM rejected token %s... as invalid: %s", token[:8], message)
    else:
        logger.error("Push delivery failed for token %s...: %s", token[:8], message)
    return PushResult(token=token, status=status, error=message)


def send_push(
    tokens: Iterable[str],
    title: str,
    body: str,
    data: Mapping[str, Any] | None = None,
) -> list[PushResult]:
    """Deliver one notification to every token and classify each outcome.

    Raises :class:`PushConfigurationError` before any request when FCM is not
    configured. Individual token failures never raise; they are reported in
    the returned list in the same order as ``tokens``.
    """

    token_list = [token for token in dict.fromkeys(tokens) if token]
    if not token_list:
        return []

    settings = get_settings()
    project_id = (settings.fcm_project_id or "").strip()
    if not project_id:
        raise PushConfigurationError("FCM configuration incomplete: set FCM_PROJECT_ID")

    access_token = _access_token()
    url = FCM_SEND_URL.format(project_id=project_id)
    timeout = settings.notification_send_timeout_seconds
    results = [
        _send_one(url, access_token, token, title, body, data, timeout)
        for token in token_list
    ]

    delivered = sum(1 for result in results if result.succeeded)
    logger.info(
        "Push delivery finished: %s delivered, %s failed", delivered, len(results) - delivered
    )
    return results


__all__ = [
    "PUSH_STATUS_FAILED",
    "PUSH_STATUS_INVALID_TOKEN",
    "PUSH_STATUS_SENT",
    "PushResult",
    "is_push_configured",
    "send_push",
]
