"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - NormalizedEmail is only produced by core.email_normalizer.normalize_email
    - IdentityField values are the store field names carrying unique constraints
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


NormalizedEmail = NewType("NormalizedEmail", str)


class IdentityField(str, Enum):
    """Applicant fields that must be unique across all identities."""
    EMAIL = "email"
    PHONE = "phone"
    NATIONAL_ID = "aadhar_number"


class PaymentStatus(str, Enum):
    """The only gateway status this system acts on."""
    SUCCESS = "success"


@dataclass(frozen=True)
class ApplicantIdentity:
    """Identity fields submitted for creation. Email must already be normalized."""
    email: NormalizedEmail
    phone: str
    national_id: str
    application_number: str | None = None

    def to_fields(self) -> dict:
        return {
            IdentityField.EMAIL.value: self.email,
            IdentityField.PHONE.value: self.phone,
            IdentityField.NATIONAL_ID.value: self.national_id,
            "application_number": self.application_number,
        }
