"""Service Dependencies — FastAPI providers that wire services to collaborators.

Invariants:
    - Services are built per request around the request's DB session
    - Collaborator singletons come from get_db/get_cache/get_mailer so tests can
      swap them with app.dependency_overrides
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from intake.config import Settings, get_settings
from intake.core.notification_content import Signature
from intake.core.repository_protocols import EmailSender, ExpiringCache
from intake.infrastructure.brevo_client import get_mailer
from intake.infrastructure.cache import get_cache
from intake.infrastructure.database import get_db
from intake.infrastructure.document_store import SqlDocumentCollection
from intake.models.applicant import Applicant
from intake.models.payment import Payment
from intake.services.application_notifier import ApplicationNotifier
from intake.services.identity_guard import IdentityGuard
from intake.services.otp_service import OtpService
from intake.services.payment_reconciliation import PaymentReconciliationService


def get_otp_service(
    cache: ExpiringCache = Depends(get_cache),
    mailer: EmailSender = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
) -> OtpService:
    return OtpService(
        cache, mailer,
        ttl_seconds=settings.otp_ttl_seconds,
        sender_name=settings.otp_sender_name,
    )


def get_identity_guard(db: AsyncSession = Depends(get_db)) -> IdentityGuard:
    return IdentityGuard(
        applicants=SqlDocumentCollection(db, Applicant),
        payments=SqlDocumentCollection(db, Payment),
    )


def get_payment_service(
    db: AsyncSession = Depends(get_db),
) -> PaymentReconciliationService:
    return PaymentReconciliationService(SqlDocumentCollection(db, Payment))


def get_notifier(
    mailer: EmailSender = Depends(get_mailer),
    settings: Settings = Depends(get_settings),
) -> ApplicationNotifier:
    return ApplicationNotifier(
        mailer,
        admin_email=settings.admin_recipient,
        signature=Signature(
            company_name=settings.company_name,
            name=settings.signature_name,
            title=settings.signature_title,
        ),
        admin_sender_name=settings.notification_sender_name,
        confirmation_sender_name=settings.confirmation_sender_name,
    )
