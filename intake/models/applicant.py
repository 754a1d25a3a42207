"""Applicant ORM — one row per applicant identity.

Invariants:
    - email, phone and aadhar_number are each unique (independent constraints)
    - email is stored normalized; rows written before normalization may not be
    - application_number is opaque and not unique
    - Rows are created once and never updated or deleted by this service
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from intake.db.base import Base


class Applicant(Base):
    """Applicant identity record."""
    __tablename__ = "applicants"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True,
    )
    phone: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True,
    )
    aadhar_number: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True,
    )
    application_number: Mapped[str | None] = mapped_column(
        String(64), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_document(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "phone": self.phone,
            "aadhar_number": self.aadhar_number,
            "application_number": self.application_number,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
