"""Application Notifier — forwards a submitted application by email.

Invariants:
    - The admin email is always sent first; the applicant confirmation only
      when formData.email normalizes to a valid address
    - The PDF (base64, no data: prefix) is passed through untouched
    - Any provider failure surfaces as DependencyError("Failed to send email")
"""

import logging

from intake.core.email_normalizer import normalize_email
from intake.core.errors import DependencyError
from intake.core.notification_content import (
    ADMIN_SUBJECT,
    CONFIRMATION_SUBJECT,
    PDF_ATTACHMENT_NAME,
    Signature,
    render_admin_email,
    render_confirmation_email,
)
from intake.core.repository_protocols import EmailAttachment, EmailSender

logger = logging.getLogger(__name__)


class ApplicationNotifier:
    def __init__(
        self,
        mailer: EmailSender,
        admin_email: str,
        signature: Signature,
        admin_sender_name: str | None = None,
        confirmation_sender_name: str | None = None,
    ):
        self._mailer = mailer
        self._admin_email = admin_email
        self._signature = signature
        self._admin_sender_name = admin_sender_name
        self._confirmation_sender_name = confirmation_sender_name

    async def send_application(
        self,
        form_data: dict,
        files: dict | None = None,
        pdf_base64: str | None = None,
    ) -> None:
        files = files or {}
        attachments = (
            [EmailAttachment(PDF_ATTACHMENT_NAME, pdf_base64)] if pdf_base64 else None
        )
        try:
            await self._mailer.send(
                self._admin_email,
                ADMIN_SUBJECT,
                render_admin_email(form_data, files),
                sender_name=self._admin_sender_name,
                attachments=attachments,
            )
            applicant = normalize_email(form_data.get("email"))
            if applicant is not None:
                await self._mailer.send(
                    applicant,
                    CONFIRMATION_SUBJECT,
                    render_confirmation_email(form_data, self._signature),
                    sender_name=self._confirmation_sender_name,
                )
            elif form_data.get("email"):
                logger.warning(
                    "Skipping applicant confirmation: invalid email",
                    extra={"field": "formData.email"},
                )
        except DependencyError as e:
            raise e.with_public_message("Failed to send email") from e
        logger.info(
            "Application notification sent",
            extra={"operation": "send_application"},
        )
