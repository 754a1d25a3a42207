"""Webhook Payload — tolerant decoding and prioritized field extraction.

Tests:
    - JSON first, form-urlencoded second, {} otherwise
    - First non-empty candidate key wins
    - Success detection is case-insensitive and needs a valid email
"""

import pytest

from intake.core.webhook_payload import (
    decode_payload, first_present, parse_notification, EMAIL_KEYS, STATUS_KEYS,
)


# --- decode_payload -----------------------------------------------------------

def test_decodes_json_object():
    assert decode_payload(b'{"email": "a@b.com", "status": "success"}') == {
        "email": "a@b.com", "status": "success",
    }


def test_falls_back_to_form_urlencoded():
    body = b"buyerEmail=A%40B.com&transaction_status=Success&amount=10.00"
    assert decode_payload(body) == {
        "buyerEmail": "A@B.com", "transaction_status": "Success", "amount": "10.00",
    }


def test_accepts_text_input():
    assert decode_payload("status=failure") == {"status": "failure"}


@pytest.mark.parametrize("body", [None, b"", b"   ", "\n"])
def test_empty_bodies_decode_to_empty_mapping(body):
    assert decode_payload(body) == {}


@pytest.mark.parametrize("body", [b"42", b"[1, 2]", b'"just a string"', b"null"])
def test_non_object_json_decodes_to_empty_mapping(body):
    assert decode_payload(body) == {}


def test_undecodable_bytes_decode_to_empty_mapping():
    assert decode_payload(b"\xff\xfe\x00garbage") == {}


def test_malformed_json_is_tried_as_form():
    # Not JSON, not key=value pairs either: nothing usable
    assert decode_payload(b"{not json") == {}


# --- first_present ------------------------------------------------------------

def test_first_non_empty_candidate_wins():
    payload = {"email": "", "buyerEmail": "buyer@x.com", "customer_email": "c@x.com"}
    assert first_present(payload, EMAIL_KEYS) == "buyer@x.com"


def test_priority_order_is_respected():
    payload = {"status_code": "failure", "status": "success"}
    assert first_present(payload, STATUS_KEYS) == "success"


def test_numeric_values_are_stringified():
    assert first_present({"status_code": 200}, STATUS_KEYS) == "200"


def test_nested_values_are_skipped():
    payload = {"status": {"code": "success"}, "payment_status": "success"}
    assert first_present(payload, STATUS_KEYS) == "success"


def test_no_candidate_returns_none():
    assert first_present({"foo": "bar"}, EMAIL_KEYS) is None


# --- parse_notification -------------------------------------------------------

def test_success_notification_is_normalized():
    n = parse_notification(b'{"customerEmail": " User@Example.com ", "payment_status": "SUCCESS"}')
    assert n.email == "user@example.com"
    assert n.is_actionable
    assert n.is_success


def test_failure_status_is_not_success():
    n = parse_notification(b'{"email": "a@b.com", "status": "FAILURE"}')
    assert n.is_actionable
    assert not n.is_success


def test_invalid_email_is_not_actionable():
    n = parse_notification(b'{"email": "not-an-email", "status": "success"}')
    assert n.raw_email == "not-an-email"
    assert n.email is None
    assert not n.is_actionable
    assert not n.is_success


def test_missing_status_is_not_actionable():
    n = parse_notification(b"email=a%40b.com")
    assert n.email == "a@b.com"
    assert n.status is None
    assert not n.is_actionable
