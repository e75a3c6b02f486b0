"""Identity store: accounts keyed by email."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database import dialect_insert
from models import Account
from services.errors import NotFoundError

logger = logging.getLogger(__name__)


async def get_account(session: AsyncSession, account_id: str) -> Optional[Account]:
    result = await session.execute(select(Account).where(Account.id == account_id))
    return result.scalar_one_or_none()


async def get_account_by_email(session: AsyncSession, email: str) -> Optional[Account]:
    result = await session.execute(select(Account).where(Account.email == email))
    return result.scalar_one_or_none()


async def require_account(session: AsyncSession, account_id: str, message: str = "User not found") -> Account:
    account = await get_account(session, account_id)
    if account is None:
        raise NotFoundError(message)
    return account


async def ensure_account(session: AsyncSession, email: str, now: datetime) -> Account:
    """Return the account for email, creating it on first sight."""
    account = await get_account_by_email(session, email)
    if account is not None:
        return account
    stmt = (
        dialect_insert(session, Account)
        .values(id=str(uuid.uuid4()), email=email, created_at=now, updated_at=now)
        .on_conflict_do_nothing(index_elements=["email"])
    )
    await session.execute(stmt)
    account = await get_account_by_email(session, email)
    logger.info("Created account %s for %s", account.id, email)
    return account
