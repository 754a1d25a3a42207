"""Notification Routes — forward a completed application by email."""

from fastapi import APIRouter, Depends

from intake.api.dependencies import get_notifier
from intake.schemas.notification import MessageResponse, SendEmailRequest
from intake.services.application_notifier import ApplicationNotifier

router = APIRouter(tags=["notifications"])


@router.post("/send-email", response_model=MessageResponse)
async def send_email(
    body: SendEmailRequest, notifier: ApplicationNotifier = Depends(get_notifier),
):
    await notifier.send_application(body.form_data, body.files, body.pdf_base64)
    return MessageResponse(message="Email sent successfully!")
