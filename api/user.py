from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_session, get_registration_service
from database import get_db
from schemas.registration import FullRegistrationIn
from services.completion import get_account_status
from services.registration import RegistrationService, TradeLicenseUpload
from services.tokens import SessionClaims
from utils.form_fields import read_request_body
from utils.response import success_response

router = APIRouter(prefix="/api/user", tags=["user"])

TRADE_LICENSE_FILE_FIELD = "trade[file]"


@router.post("/full-registration")
async def full_registration(
    request: Request,
    db: AsyncSession = Depends(get_db),
    caller: SessionClaims = Depends(get_current_session),
    registration: RegistrationService = Depends(get_registration_service),
):
    body = await read_request_body(request)
    upload = None
    file = body.file(TRADE_LICENSE_FILE_FIELD)
    if file is not None:
        # Reads at most one byte past the limit.
        content = await file.read(registration.max_upload_bytes + 1)
        upload = TradeLicenseUpload(filename=file.filename, content=content)
    result = await registration.full_registration(
        db, caller.account_id, FullRegistrationIn.from_body(body), upload=upload
    )
    return success_response("Full registration saved successfully", result)


@router.get("/status")
async def account_status(
    db: AsyncSession = Depends(get_db),
    caller: SessionClaims = Depends(get_current_session),
):
    status = await get_account_status(db, caller.account_id)
    return success_response("Account status retrieved successfully", status)


@router.get("/data")
async def user_data(
    db: AsyncSession = Depends(get_db),
    caller: SessionClaims = Depends(get_current_session),
    registration: RegistrationService = Depends(get_registration_service),
):
    snapshot = await registration.snapshot(db, caller.account_id)
    return success_response("User data retrieved successfully", snapshot)
