"""OTP Schemas — request/response bodies for /send-otp and /verify-otp."""

from pydantic import BaseModel


class SendOtpRequest(BaseModel):
    email: str | None = None


class VerifyOtpRequest(BaseModel):
    email: str | None = None
    # Numbers pass schema validation but never match a stored code
    otp: str | int | None = None


class OtpResponse(BaseModel):
    success: bool = True
    message: str
