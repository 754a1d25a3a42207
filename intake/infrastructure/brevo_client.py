"""Brevo Email Sender — transactional email over the Brevo v3 HTTP API.

Invariants:
    - One POST per send; no automatic retry
    - Non-2xx responses and transport errors are mapped to EmailDeliveryError
    - The API key only travels in the `api-key` header, never in logs

Design Decisions:
    - httpx.AsyncClient injected or owned: tests pass a MockTransport client
"""

import logging

import httpx

from intake.core.errors import EmailDeliveryError, ErrorContext
from intake.core.repository_protocols import EmailAttachment, EmailSender

logger = logging.getLogger(__name__)


class BrevoEmailSender:
    """EmailSender backed by Brevo's /v3/smtp/email endpoint."""

    def __init__(
        self,
        api_key: str,
        sender_email: str,
        sender_name: str,
        api_url: str = "https://api.brevo.com/v3/smtp/email",
        timeout_seconds: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.api_url = api_url
        self._headers = {
            "api-key": api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }
        self._client = client or httpx.AsyncClient(timeout=timeout_seconds)

    def _payload(
        self,
        to: str,
        subject: str,
        html_body: str,
        sender_name: str | None,
        attachments: list[EmailAttachment] | None,
    ) -> dict:
        payload = {
            "sender": {
                "name": sender_name or self.sender_name,
                "email": self.sender_email,
            },
            "to": [{"email": to}],
            "subject": subject,
            "htmlContent": html_body,
        }
        if attachments:
            payload["attachment"] = [
                {"name": a.name, "content": a.content_base64} for a in attachments
            ]
        return payload

    async def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        *,
        sender_name: str | None = None,
        attachments: list[EmailAttachment] | None = None,
    ) -> str:
        """Send one email. Returns Brevo's messageId."""
        context = ErrorContext(operation="send_email")
        try:
            response = await self._client.post(
                self.api_url,
                headers=self._headers,
                json=self._payload(to, subject, html_body, sender_name, attachments),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"Brevo returned {e.response.status_code}: {e.response.text[:200]}",
                context=context,
            ) from e
        except httpx.HTTPError as e:
            raise EmailDeliveryError(
                f"Brevo request failed: {type(e).__name__}: {e}", context=context,
            ) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        message_id = body.get("messageId", "") if isinstance(body, dict) else ""
        logger.info(f"Email accepted by Brevo: {subject}", extra={"operation": "send_email"})
        return message_id

    async def close(self) -> None:
        await self._client.aclose()


# Singleton (initialized on startup)
mailer: BrevoEmailSender | None = None


def init_mailer(
    api_key: str, sender_email: str, sender_name: str,
    api_url: str, timeout_seconds: float,
):
    global mailer
    mailer = BrevoEmailSender(
        api_key, sender_email, sender_name,
        api_url=api_url, timeout_seconds=timeout_seconds,
    )


async def close_mailer():
    global mailer
    if mailer is not None:
        await mailer.close()
        mailer = None


def get_mailer() -> EmailSender:
    """FastAPI dependency for the email sender."""
    if mailer is None:
        raise EmailDeliveryError("Email sender not initialized")
    return mailer
