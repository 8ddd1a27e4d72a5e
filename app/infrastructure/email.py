"""Helpers for sending notification emails via SendGrid."""

from __future__ import annotations

import html
import json
import logging
from typing import Any, Callable

import anyio
from anyio import to_thread
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, str], bool]


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
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _log_sendgrid_failure(source: Any, recipient: str) -> None:
    """Log a failed SendGrid call (exception or response) with its details."""

    status_code = getattr(source, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(source, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid rejected email to %s with status %s: %s",
            recipient,
            status_code,
            details,
        )
    elif status_code:
        logger.error("SendGrid rejected email to %s with status %s", recipient, status_code)
    elif details:
        logger.error("SendGrid request for %s failed: %s", recipient, details)
    else:
        logger.error("SendGrid request for %s failed: %r", recipient, source)


def _apply_timeout(client: Any, timeout: float) -> None:
    """Bound how long ``client`` waits for the SendGrid API."""

    http_client = getattr(client, "client", None)
    if http_client is not None:
        http_client.timeout = timeout


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials.

    Returns ``True`` only when SendGrid accepted the message. Failures are
    logged and reported through the return value; this function never raises.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        _apply_timeout(client, settings.sendgrid_timeout_seconds)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        _log_sendgrid_failure(exc, recipient)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(response, recipient)
        return False

    logger.info("Notification email sent to %s", recipient)
    return True


def render_notification_email(title: str, message: str) -> tuple[str, str]:
    """Return the subject and HTML body used for notification emails."""

    prefix = get_settings().email_subject_prefix
    subject = f"{prefix}: {title}" if prefix else title
    html_content = "".join(
        (
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">',
            f'<h2 style="color: #333;">{html.escape(prefix or "")} Notification</h2>',
            '<div style="background-color: #f5f5f5; padding: 20px; border-radius: 5px;">',
            f"<p>{html.escape(message)}</p>",
            "</div>",
            '<p style="color: #666; font-size: 12px; margin-top: 20px;">',
            f"This is an automated notification from {html.escape(prefix or 'the helpdesk')}.",
            "</p>",
            "</div>",
        )
    )
    return subject, html_content


class EmailDispatcher:
    """Best-effort, non-blocking transmission of notification emails.

    Sends run on worker threads drawn from a limiter owned by the dispatcher,
    so a stalled relay only ever holds up other emails.
    """

    def __init__(
        self, sender: EmailSender | None = None, *, max_concurrency: int | None = None
    ) -> None:
        self._sender = sender
        self._max_concurrency = max_concurrency
        self._limiter: anyio.CapacityLimiter | None = None

    @property
    def limiter(self) -> anyio.CapacityLimiter:
        if self._limiter is None:
            self._limiter = anyio.CapacityLimiter(
                self._max_concurrency or get_settings().email_max_concurrency
            )
        return self._limiter

    async def send(self, address: str, subject: str, body_html: str) -> bool:
        """Send one email from a worker thread; failures are logged, never raised."""

        sender = self._sender or send_email
        try:
            return bool(
                await to_thread.run_sync(
                    sender, subject, body_html, address, limiter=self.limiter
                )
            )
        except Exception:
            logger.exception("Email delivery to %s failed", address)
            return False


__all__ = [
    "EmailDispatcher",
    "render_notification_email",
    "send_email",
]
