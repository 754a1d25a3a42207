"""Webhook Payload — tolerant decoding of payment-gateway notifications.

Invariants:
    - decode_payload never raises; unusable input decodes to {}
    - JSON is attempted first, then form-urlencoded, regardless of Content-Type
    - Field extraction walks a prioritized list of candidate keys; the first
      non-empty value wins
    - parse_notification is pure: no IO, no logging

Design Decisions:
    - Candidate-key lists instead of a fixed schema: the gateway's field names
      drift between integrations and are not under our control
"""

import json
from dataclasses import dataclass
from urllib.parse import parse_qsl

from intake.core.domain_types import NormalizedEmail, PaymentStatus
from intake.core.email_normalizer import normalize_email

EMAIL_KEYS = ("email", "buyerEmail", "customer_email", "customerEmail")
STATUS_KEYS = ("status", "transaction_status", "payment_status", "status_code")


@dataclass(frozen=True)
class WebhookNotification:
    """What we could extract from one delivery."""
    raw_email: str | None
    email: NormalizedEmail | None
    status: str | None

    @property
    def is_actionable(self) -> bool:
        return self.email is not None and bool(self.status)

    @property
    def is_success(self) -> bool:
        return (
            self.is_actionable
            and self.status.strip().lower() == PaymentStatus.SUCCESS.value
        )


def decode_payload(raw_body: bytes | str | None) -> dict:
    """Decode a body of unknown encoding into a flat mapping."""
    if raw_body is None:
        return {}
    if isinstance(raw_body, bytes):
        try:
            text = raw_body.decode("utf-8")
        except UnicodeDecodeError:
            return {}
    else:
        text = raw_body
    if not text.strip():
        return {}

    try:
        decoded = json.loads(text)
    except ValueError:
        return dict(parse_qsl(text))
    # Valid JSON that is not an object (a number, list...) carries no fields
    return decoded if isinstance(decoded, dict) else {}


def first_present(payload: dict, keys: tuple[str, ...]) -> str | None:
    """Return the first non-empty candidate value, stringified."""
    for key in keys:
        value = payload.get(key)
        if value is None or isinstance(value, (dict, list, bool)):
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def parse_notification(raw_body: bytes | str | None) -> WebhookNotification:
    """Decode a delivery and extract the applicant email and payment status."""
    payload = decode_payload(raw_body)
    raw_email = first_present(payload, EMAIL_KEYS)
    return WebhookNotification(
        raw_email=raw_email,
        email=normalize_email(raw_email),
        status=first_present(payload, STATUS_KEYS),
    )
