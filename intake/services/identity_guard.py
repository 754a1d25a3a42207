"""Identity Uniqueness Guard — advisory existence checks and authoritative creation.

Invariants:
    - exists()/check_*_exists() are advisory UX checks only; two concurrent
      store() calls may both pass them
    - store() is the only authoritative check: the document store's unique
      constraints on email, phone and aadhar_number decide, and at most one
      of two racing writes succeeds
    - Email lookups query the normalized key first, then fall back to a
      case-folded match for records written before normalization
    - New writes always use the normalized email
"""

import logging

from intake.core.domain_types import ApplicantIdentity, IdentityField
from intake.core.email_normalizer import normalize_email
from intake.core.errors import (
    ConflictError, DependencyError, InputValidationError,
)
from intake.core.repository_protocols import DocumentCollection

logger = logging.getLogger(__name__)


async def exists_with_legacy_fallback(
    collection: DocumentCollection, field: str, raw: str,
) -> bool:
    """Normalized-key lookup with a case-folded fallback for legacy records.

    Rows written before normalization keep their original casing and padding;
    folding the stored value matches them from the normalized form and from
    any raw spelling of the same address.
    """
    normalized = normalize_email(raw)
    if normalized is None:
        raise InputValidationError("Invalid email format", field=field)
    page = await collection.list_documents(**{field: normalized})
    if page.total > 0:
        return True
    return await collection.count_case_folded(field, normalized) > 0


async def check_paid(payments: DocumentCollection, email: str | None) -> bool:
    """Paid marker for this applicant; absence means not paid."""
    if not email:
        raise InputValidationError("Email is required", field="email")
    try:
        return await exists_with_legacy_fallback(payments, "email", email)
    except DependencyError as e:
        raise e.with_public_message("Failed to check payment status") from e


class IdentityGuard:
    """Existence checks and creation of applicant identities."""

    def __init__(
        self,
        applicants: DocumentCollection,
        payments: DocumentCollection | None = None,
    ):
        self._applicants = applicants
        self._payments = payments

    async def exists(self, field: IdentityField, value: str) -> bool:
        """Any applicant with field == value. Callers normalize emails first."""
        page = await self._applicants.list_documents(**{field.value: value})
        return page.total > 0

    async def check_email_exists(self, email: str | None) -> bool:
        if not email:
            raise InputValidationError("Email is required", field="email")
        try:
            return await exists_with_legacy_fallback(
                self._applicants, IdentityField.EMAIL.value, email,
            )
        except DependencyError as e:
            raise e.with_public_message("Error checking Email") from e

    async def check_phone_exists(self, phone: str | None) -> bool:
        if not phone:
            raise InputValidationError("Phone is required", field="phone")
        try:
            return await self.exists(IdentityField.PHONE, phone)
        except DependencyError as e:
            raise e.with_public_message("Error checking Phone") from e

    async def check_national_id_exists(self, national_id: str | None) -> bool:
        if not national_id:
            raise InputValidationError("Aadhar is required", field="aadhar")
        try:
            return await self.exists(IdentityField.NATIONAL_ID, national_id)
        except DependencyError as e:
            raise e.with_public_message("Error checking Aadhar") from e

    async def store(
        self,
        email: str | None,
        phone: str | None,
        national_id: str | None,
        application_number: str | None = None,
    ) -> dict:
        """Create the identity; the store's constraints arbitrate duplicates."""
        if not email or not phone or not national_id:
            raise InputValidationError("Email, Phone, and Aadhar are required")
        normalized = normalize_email(email)
        if normalized is None:
            raise InputValidationError("Invalid email format", field="email")

        identity = ApplicantIdentity(
            email=normalized,
            phone=phone,
            national_id=national_id,
            application_number=application_number,
        )
        try:
            created = await self._applicants.create_document(identity.to_fields())
        except ConflictError as e:
            logger.info("Duplicate applicant identity rejected", extra={"operation": "store_identity"})
            raise ConflictError("Data already exists", e.context) from e
        except DependencyError as e:
            raise e.with_public_message("Error storing Data") from e
        logger.info("Applicant identity stored", extra={"operation": "store_identity"})
        return created

    async def check_payment_status(self, email: str | None) -> bool:
        if self._payments is None:
            raise RuntimeError("IdentityGuard built without a payments collection")
        return await check_paid(self._payments, email)
