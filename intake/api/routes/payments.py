"""Payment Routes — gateway webhook and paid-status query.

Invariants:
    - POST /payu-webhook answers 200 "OK" for every delivery, whatever the body,
      content type, or internal outcome
    - The webhook reads the raw body itself; no JSON parsing by FastAPI
    - Oversized webhook bodies are dropped unread past the limit and still
      acknowledged; the app-wide 413 guard skips this path
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from intake.api.dependencies import get_payment_service
from intake.config import Settings, get_settings
from intake.infrastructure import database
from intake.infrastructure.document_store import SqlDocumentCollection
from intake.models.payment import Payment
from intake.schemas.payment import PaymentCheckRequest, PaymentStatusResponse
from intake.services.payment_reconciliation import PaymentReconciliationService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["payments"])

WEBHOOK_PATH = "/payu-webhook"


async def read_capped_body(request: Request, limit: int) -> bytes | None:
    """Request body, or None as soon as more than `limit` bytes arrive."""
    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            return None
        chunks.append(chunk)
    return b"".join(chunks)


@router.post(WEBHOOK_PATH, response_class=PlainTextResponse)
async def payu_webhook(
    request: Request, settings: Settings = Depends(get_settings),
):
    """Ingest one gateway notification and always acknowledge it."""
    content_type = request.headers.get("content-type")
    try:
        raw_body = await read_capped_body(request, settings.max_body_bytes)
        if raw_body is None:
            logger.warning(
                "Payment webhook body over size limit, ignored",
                extra={"operation": "payment_webhook", "content_type": content_type},
            )
            return PlainTextResponse("OK", status_code=200)
        if database.db_manager is None:
            raise RuntimeError("Database not initialized")
        async with database.db_manager.session() as db:
            service = PaymentReconciliationService(SqlDocumentCollection(db, Payment))
            await service.ingest(raw_body, content_type)
    except Exception as e:
        logger.error(
            f"Payment webhook could not be processed: {e}",
            exc_info=True,
            extra={"operation": "payment_webhook", "content_type": content_type},
        )
    return PlainTextResponse("OK", status_code=200)


@router.post("/check-payment", response_model=PaymentStatusResponse)
async def check_payment(
    body: PaymentCheckRequest,
    payments: PaymentReconciliationService = Depends(get_payment_service),
):
    return PaymentStatusResponse(paid=await payments.query_paid_status(body.email))
