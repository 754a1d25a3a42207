"""OTP Routes — issue and verify email one-time codes.

Invariants:
    - 400 for missing/invalid email and for any failed verification
    - Failed verifications share one message (no hint about the cause)
"""

from fastapi import APIRouter, Depends

from intake.api.dependencies import get_otp_service
from intake.schemas.otp import OtpResponse, SendOtpRequest, VerifyOtpRequest
from intake.services.otp_service import OtpService

router = APIRouter(tags=["otp"])


@router.post("/send-otp", response_model=OtpResponse)
async def send_otp(
    body: SendOtpRequest, otp: OtpService = Depends(get_otp_service),
):
    await otp.issue(body.email)
    return OtpResponse(message="OTP sent to email")


@router.post("/verify-otp", response_model=OtpResponse)
async def verify_otp(
    body: VerifyOtpRequest, otp: OtpService = Depends(get_otp_service),
):
    await otp.verify(body.email, body.otp)
    return OtpResponse(message="OTP verified")
