"""Helpers for delivering notification emails via SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail

from app.config import get_settings
from app.domain.exceptions import EmailConfigurationError, EmailDeliveryError

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        # Fall back to a JSON string for unrecognised payloads
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        try:
            return "; ".join(str(item) for item in parsed)
        except TypeError:
            return None

    return None


def _describe_sendgrid_exception(exc: Exception) -> tuple[int | None, str]:
    """Log a SendGrid API error and return its status code and description."""

    status_code = getattr(exc, "status_code", None)
    body = getattr(exc, "body", None)
    details = _extract_sendgrid_error_details(body)

    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
        return status_code, f"SendGrid API request failed with status {status_code}: {details}"
    if status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
        return status_code, f"SendGrid API request failed with status {status_code}"
    if details:
        logger.error("SendGrid API request failed: %s", details)
        return None, f"SendGrid API request failed: {details}"
    logger.exception("Error sending email via SendGrid: %s", exc)
    return None, f"Error sending email via SendGrid: {exc}"


def _describe_unsuccessful_response(response: Any) -> tuple[int | None, str]:
    """Log details from an unsuccessful SendGrid response object."""

    status_code = getattr(response, "status_code", None)
    body = getattr(response, "body", None)
    details = _extract_sendgrid_error_details(body)

    if details:
        logger.error(
            "SendGrid API responded with status %s: %s", status_code, details
        )
        return status_code, f"SendGrid API responded with status {status_code}: {details}"
    logger.error("SendGrid API responded with status %s", status_code)
    return status_code, f"SendGrid API responded with status {status_code}"


def is_email_configured() -> bool:
    """Return ``True`` when both SendGrid credentials are available."""

    settings = get_settings()
    return bool(settings.sendgrid_api_key and settings.sendgrid_sender)


def ensure_email_configured() -> None:
    """Raise :class:`EmailConfigurationError` when SendGrid is not configured."""

    if not is_email_configured():
        raise EmailConfigurationError(
            "SendGrid configuration incomplete: set SENDGRID_API_KEY and SENDGRID_SENDER"
        )


def _build_client(settings) -> SendGridAPIClient:
    client = SendGridAPIClient(settings.sendgrid_api_key)
    # python_http_client waits forever unless the HTTP client carries a timeout.
    client.client.timeout = settings.notification_send_timeout_seconds
    return client


def send_email(
    subject: str,
    html_content: str,
    recipient: str,
    *,
    text_content: str | None = None,
) -> None:
    """Send an email using the configured SendGrid credentials.

    Raises :class:`EmailConfigurationError` before contacting SendGrid when
    credentials are missing and :class:`EmailDeliveryError` when the API call
    fails or is rejected. Nothing is retried here.
    """

    ensure_email_configured()
    settings = get_settings()

    message = Mail(
        from_email=From(settings.sendgrid_sender, settings.sendgrid_sender_name),
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
        plain_text_content=text_content,
    )

    try:
        client = _build_client(settings)
        response = client.send(message)
    except Exception as exc:
        status_code, description = _describe_sendgrid_exception(exc)
        raise EmailDeliveryError(description, status_code=status_code) from exc

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        status_code, description = _describe_unsuccessful_response(response)
        raise EmailDeliveryError(description, status_code=status_code)

    logger.debug("SendGrid accepted email '%s' for %s", subject, recipient)


__all__ = ["ensure_email_configured", "is_email_configured", "send_email"]
