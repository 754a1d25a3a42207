"""Payment Reconciliation — idempotent ingestion of gateway webhooks.

Invariants:
    - ingest() never raises: the gateway retries on anything but success, so
      every internal failure is logged and swallowed
    - Only a "success" status (case-insensitive) changes state
    - At most one payment record per normalized email: re-deliveries are no-ops,
      and a uniqueness conflict from a concurrent re-delivery counts as handled
    - query_paid_status() reports absence as False, never as an error
"""

import logging

from intake.core.errors import ConflictError, IntakeError
from intake.core.repository_protocols import DocumentCollection
from intake.core.webhook_payload import parse_notification
from intake.services.identity_guard import check_paid

logger = logging.getLogger(__name__)


class PaymentReconciliationService:
    """Records paid state per applicant from loosely structured webhooks."""

    def __init__(self, payments: DocumentCollection):
        self._payments = payments

    async def ingest(self, raw_body: bytes | str | None, content_type: str | None) -> None:
        """Process one delivery. Always returns normally."""
        try:
            await self._ingest(raw_body, content_type)
        except IntakeError as e:
            logger.error(
                f"Payment webhook processing failed: {e.message}",
                extra={
                    "error_code": e.code,
                    "detail": getattr(e, "detail", None),
                    "operation": "payment_webhook",
                },
            )
        except Exception as e:
            logger.error(
                f"Unexpected error in payment webhook: {e}",
                exc_info=True, extra={"operation": "payment_webhook"},
            )

    async def _ingest(self, raw_body: bytes | str | None, content_type: str | None) -> None:
        notification = parse_notification(raw_body)
        logger.debug(
            "Payment webhook received",
            extra={"content_type": content_type, "payment_status": notification.status},
        )

        if not notification.is_actionable:
            logger.warning(
                "Payment webhook missing valid email or status",
                extra={
                    "content_type": content_type,
                    "payment_status": notification.status,
                    "field": "email" if notification.email is None else "status",
                },
            )
            return

        if not notification.is_success:
            logger.info(
                "Payment webhook with non-success status ignored",
                extra={"payment_status": notification.status},
            )
            return

        existing = await self._payments.list_documents(email=notification.email)
        if existing.total > 0:
            logger.info("Payment already recorded, treating re-delivery as handled")
            return
        try:
            await self._payments.create_document(
                {"email": notification.email, "paid": True},
            )
        except ConflictError:
            logger.info("Payment recorded concurrently, treating re-delivery as handled")
            return
        logger.info("Payment recorded", extra={"operation": "record_payment"})

    async def query_paid_status(self, email: str | None) -> bool:
        return await check_paid(self._payments, email)
