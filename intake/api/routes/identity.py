"""Identity Routes — advisory duplicate checks and identity creation.

Invariants:
    - /check-* answers are advisory; only /store-data enforces uniqueness
    - /store-data returns 201 on creation and 409 when any unique field clashes
"""

from fastapi import APIRouter, Depends, status

from intake.api.dependencies import get_identity_guard
from intake.schemas.identity import (
    AadharCheckRequest,
    EmailCheckRequest,
    ExistsResponse,
    PhoneCheckRequest,
    StoreDataRequest,
    StoreDataResponse,
)
from intake.services.identity_guard import IdentityGuard

router = APIRouter(tags=["identity"])


@router.post("/check-aadhar", response_model=ExistsResponse)
async def check_aadhar(
    body: AadharCheckRequest, guard: IdentityGuard = Depends(get_identity_guard),
):
    return ExistsResponse(exists=await guard.check_national_id_exists(body.aadhar))


@router.post("/check-email", response_model=ExistsResponse)
async def check_email(
    body: EmailCheckRequest, guard: IdentityGuard = Depends(get_identity_guard),
):
    return ExistsResponse(exists=await guard.check_email_exists(body.email))


@router.post("/check-phone", response_model=ExistsResponse)
async def check_phone(
    body: PhoneCheckRequest, guard: IdentityGuard = Depends(get_identity_guard),
):
    return ExistsResponse(exists=await guard.check_phone_exists(body.phone))


@router.post(
    "/store-data", response_model=StoreDataResponse,
    status_code=status.HTTP_201_CREATED,
)
async def store_data(
    body: StoreDataRequest, guard: IdentityGuard = Depends(get_identity_guard),
):
    await guard.store(
        body.email, body.phone, body.aadhar_number, body.application_number,
    )
    return StoreDataResponse()
