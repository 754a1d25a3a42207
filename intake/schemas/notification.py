"""Notification Schemas — /send-email body.

Invariants:
    - formData and files are opaque mappings rendered by core.notification_content
    - pdfBase64 is raw base64 without a data: URL prefix
"""

from pydantic import BaseModel, ConfigDict, Field


class SendEmailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_data: dict = Field(default_factory=dict, alias="formData")
    files: dict | None = None
    pdf_base64: str | None = Field(None, alias="pdfBase64")


class MessageResponse(BaseModel):
    message: str
