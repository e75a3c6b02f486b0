"""
Account completion: an account is "old" once personal details, business details and a
trade license all exist, "new" otherwise. Recomputed from the tables on every call.
"""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import BusinessDetails, PersonalDetails, TradeLicense
from schemas.registration import AccountStatus
from services.accounts import get_account
from services.errors import NotFoundError, database_errors

STATUS_NEW = "new"
STATUS_OLD = "old"


def derive_status(
    account_id: str,
    email: str,
    has_personal: bool,
    has_business: bool,
    has_trade_license: bool,
) -> AccountStatus:
    is_complete = has_personal and has_business and has_trade_license
    return AccountStatus(
        user_id=account_id,
        email=email,
        status=STATUS_OLD if is_complete else STATUS_NEW,
        has_personal_details=has_personal,
        has_business_details=has_business,
        has_trade_license=has_trade_license,
        is_complete=is_complete,
    )


async def _exists(session: AsyncSession, model, account_id: str) -> bool:
    result = await session.execute(select(model.id).where(model.account_id == account_id).limit(1))
    return result.first() is not None


async def get_account_status(session: AsyncSession, account_id: str) -> AccountStatus:
    with database_errors("get_account_status", account_id=account_id):
        account = await get_account(session, account_id)
        if account is None:
            raise NotFoundError("Account not found")
        return derive_status(
            account.id,
            account.email,
            has_personal=await _exists(session, PersonalDetails, account_id),
            has_business=await _exists(session, BusinessDetails, account_id),
            has_trade_license=await _exists(session, TradeLicense, account_id),
        )
