"""
Financing request ledger. Requests are append-only and may only be submitted by an
account whose registration is complete.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import FinancingRequest
from schemas.financing import FinancingRequestIn
from services.completion import get_account_status
from services.errors import ForbiddenError, NotFoundError, PreconditionError, ValidationError, database_errors
from utils.timeutil import utc_now

logger = logging.getLogger(__name__)

MSG_REGISTRATION_INCOMPLETE = "Please complete your registration before requesting financing"
MSG_REQUEST_NOT_FOUND = "Financing request not found"
MSG_INVALID_AMOUNT = "Invalid amount. Must be a positive number"

# Amounts are stored as Numeric(18, 2).
AMOUNT_QUANTUM = Decimal("0.01")
MAX_AMOUNT = Decimal("9999999999999999.99")


def parse_amount(raw: str) -> Decimal:
    if not raw:
        raise ValidationError("Amount is required")
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite() or amount <= 0:
        raise ValidationError(MSG_INVALID_AMOUNT)
    if amount > MAX_AMOUNT:
        raise ValidationError(f"Invalid amount. Must not exceed {MAX_AMOUNT}")
    amount = amount.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise ValidationError(MSG_INVALID_AMOUNT)
    return amount


def parse_repayment_period(raw: str) -> int:
    if not raw:
        raise ValidationError("Repayment period is required")
    try:
        months = int(raw)
    except ValueError:
        months = 0
    if months <= 0:
        raise ValidationError("Invalid repayment period. Must be a positive number of months")
    return months


def parse_request_id(raw: str) -> str:
    if not raw:
        raise ValidationError("Request ID is required")
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        raise ValidationError("Invalid request ID") from None


class FinancingService:
    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    async def ensure_eligible(self, session: AsyncSession, account_id: str) -> None:
        """Only accounts with a complete registration may request financing."""
        status = await get_account_status(session, account_id)
        if not status.is_complete:
            raise PreconditionError(MSG_REGISTRATION_INCOMPLETE)

    async def submit(self, session: AsyncSession, account_id: str, data: FinancingRequestIn) -> FinancingRequest:
        await self.ensure_eligible(session, account_id)

        amount = parse_amount(data.amount)
        if not data.purpose:
            raise ValidationError("Purpose is required")
        months = parse_repayment_period(data.repayment_period)

        now = self._clock()
        request = FinancingRequest(
            id=str(uuid.uuid4()),
            account_id=account_id,
            amount=amount,
            purpose=data.purpose,
            repayment_period=months,
            status="pending",
            created_at=now,
            updated_at=now,
        )
        with database_errors("submit_financing_request", "Failed to create financing request", account_id=account_id):
            session.add(request)
            await session.flush()
        logger.info("Financing request %s submitted by account %s for %s", request.id, account_id, amount)
        return request

    async def list_requests(self, session: AsyncSession, account_id: str) -> list[FinancingRequest]:
        with database_errors("list_financing_requests", account_id=account_id):
            result = await session.execute(
                select(FinancingRequest)
                .where(FinancingRequest.account_id == account_id)
                .order_by(FinancingRequest.created_at.desc())
            )
            return list(result.scalars().all())

    async def get_request(self, session: AsyncSession, account_id: str, request_id: str) -> FinancingRequest:
        """Existence is resolved globally by id first; ownership is checked afterwards."""
        request_id = parse_request_id(request_id)
        with database_errors("get_financing_request", account_id=account_id, request_id=request_id):
            result = await session.execute(select(FinancingRequest).where(FinancingRequest.id == request_id))
            request = result.scalar_one_or_none()
        if request is None:
            raise NotFoundError(MSG_REQUEST_NOT_FOUND)
        if request.account_id != account_id:
            raise ForbiddenError("Unauthorized to access this request")
        return request

    async def latest(self, session: AsyncSession, account_id: str) -> Optional[FinancingRequest]:
        with database_errors("latest_financing_request", account_id=account_id):
            result = await session.execute(
                select(FinancingRequest)
                .where(FinancingRequest.account_id == account_id)
                .order_by(FinancingRequest.created_at.desc())
                .limit(1)
            )
            return result.scalar_one_or_none()
