"""Application Notifier — admin notification plus applicant confirmation."""

import logging

import pytest

from intake.core.errors import DependencyError
from intake.core.notification_content import Signature
from intake.services.application_notifier import ApplicationNotifier

from tests.fakes import RecordingMailer

SIGNATURE = Signature(company_name="Acme Health", name="R. Rao", title="Recruitment Head")


def _notifier(mailer):
    return ApplicationNotifier(
        mailer,
        admin_email="hr@example.com",
        signature=SIGNATURE,
        admin_sender_name="Job Application",
        confirmation_sender_name="Acme Recruitment",
    )


FORM = {
    "fullName": "Asha Kumar",
    "email": " Asha@Example.com",
    "post": "Block Supervisor",
    "applicationNumber": "APP-001",
    "category": "General",
    "tenth": {"school": "KV", "board": "CBSE", "year": "2015", "percentage": "88"},
}


async def test_sends_admin_then_confirmation(mailer):
    await _notifier(mailer).send_application(
        FORM, {"centerChoice1": "delhi-ncr"}, "JVBERi0xLjQ=",
    )

    assert [m["to"] for m in mailer.sent] == ["hr@example.com", "asha@example.com"]
    admin, confirmation = mailer.sent
    assert admin["subject"] == "New Job Application Received"
    assert admin["sender_name"] == "Job Application"
    assert "APP-001" in admin["html"]
    assert "Delhi-NCR" in admin["html"]
    [attachment] = admin["attachments"]
    assert attachment.name == "AGORA_Applicant_Data.pdf"
    assert attachment.content_base64 == "JVBERi0xLjQ="

    assert confirmation["subject"] == "Application Received - Next Steps"
    assert confirmation["sender_name"] == "Acme Recruitment"
    assert confirmation["attachments"] is None
    assert "Dear Asha Kumar" in confirmation["html"]
    assert "R. Rao" in confirmation["html"]


async def test_no_pdf_means_no_attachment(mailer):
    await _notifier(mailer).send_application(FORM)
    assert mailer.sent[0]["attachments"] is None


async def test_invalid_applicant_email_skips_confirmation(mailer, caplog):
    with caplog.at_level(logging.WARNING):
        await _notifier(mailer).send_application({**FORM, "email": "not-an-email"})
    assert [m["to"] for m in mailer.sent] == ["hr@example.com"]
    assert "Skipping applicant confirmation" in caplog.text


async def test_missing_applicant_email_sends_admin_only(mailer):
    form = {k: v for k, v in FORM.items() if k != "email"}
    await _notifier(mailer).send_application(form)
    assert len(mailer.sent) == 1


async def test_provider_failure_is_dependency_error():
    with pytest.raises(DependencyError) as exc_info:
        await _notifier(RecordingMailer(fail=True)).send_application(FORM)
    assert exc_info.value.to_response() == {"error": "Failed to send email"}
    assert "401" in exc_info.value.detail


async def test_user_values_are_escaped(mailer):
    await _notifier(mailer).send_application(
        {**FORM, "fullName": "<script>alert(1)</script>"},
    )
    for message in mailer.sent:
        assert "<script>" not in message["html"]
