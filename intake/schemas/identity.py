"""Identity Schemas — existence checks and identity creation.

Invariants:
    - Wire names follow the web client (camelCase aliases); Python names are snake_case
    - Phone, aadhar and application numbers arrive as JSON strings or numbers;
      numbers are stringified, only a missing value is rejected (by the service)
"""

from pydantic import BaseModel, ConfigDict, Field


class EmailCheckRequest(BaseModel):
    email: str | None = None


class PhoneCheckRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    phone: str | None = None


class AadharCheckRequest(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    aadhar: str | None = None


class ExistsResponse(BaseModel):
    exists: bool


class StoreDataRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    email: str | None = None
    phone: str | None = None
    aadhar_number: str | None = Field(None, alias="aadharNumber")
    application_number: str | None = Field(None, alias="applicationNumber")


class StoreDataResponse(BaseModel):
    success: bool = True
