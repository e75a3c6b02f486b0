from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_session, get_financing_service
from database import get_db
from schemas.financing import FinancingRequestIn, FinancingRequestResponse
from services.financing import FinancingService
from services.tokens import SessionClaims
from utils.form_fields import read_request_body
from utils.response import success_response

router = APIRouter(prefix="/api/financing", tags=["financing"])


@router.post("/request")
async def request_financing(
    request: Request,
    db: AsyncSession = Depends(get_db),
    caller: SessionClaims = Depends(get_current_session),
    financing: FinancingService = Depends(get_financing_service),
):
    # Registration gate runs before the body is read.
    await financing.ensure_eligible(db, caller.account_id)
    body = await read_request_body(request)
    payload = FinancingRequestIn(
        amount=body.get("amount"),
        purpose=body.get("purpose"),
        repayment_period=body.get("repayment_period"),
    )
    created = await financing.submit(db, caller.account_id, payload)
    return success_response(
        "Financing request submitted successfully",
        FinancingRequestResponse.from_model(created),
        status_code=201,
    )


@router.get("/requests")
async def list_financing_requests(
    db: AsyncSession = Depends(get_db),
    caller: SessionClaims = Depends(get_current_session),
    financing: FinancingService = Depends(get_financing_service),
):
    requests = await financing.list_requests(db, caller.account_id)
    return success_response(
        "Financing requests retrieved successfully",
        [FinancingRequestResponse.from_model(r) for r in requests],
    )


@router.get("/request-detail")
async def financing_request_detail(
    id: str = "",
    db: AsyncSession = Depends(get_db),
    caller: SessionClaims = Depends(get_current_session),
    financing: FinancingService = Depends(get_financing_service),
):
    found = await financing.get_request(db, caller.account_id, id)
    return success_response(
        "Financing request retrieved successfully",
        FinancingRequestResponse.from_model(found),
    )


@router.get("/latest")
async def latest_financing_request(
    db: AsyncSession = Depends(get_db),
    caller: SessionClaims = Depends(get_current_session),
    financing: FinancingService = Depends(get_financing_service),
):
    latest = await financing.latest(db, caller.account_id)
    if latest is None:
        return success_response("No financing request found", None)
    return success_response(
        "Latest financing request retrieved successfully",
        FinancingRequestResponse.from_model(latest),
    )
