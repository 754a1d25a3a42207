"""Payment Schemas — paid-status query."""

from pydantic import BaseModel


class PaymentCheckRequest(BaseModel):
    email: str | None = None


class PaymentStatusResponse(BaseModel):
    paid: bool
