"""
One-time passcode challenges. A challenge is matched by (email, code), lives for a
fixed window and can be redeemed once; issuing a new one leaves older ones alone.
"""
from __future__ import annotations

import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import Account, OtpChallenge
from services.accounts import ensure_account, get_account_by_email
from services.errors import AuthError, NotFoundError, ValidationError, database_errors
from utils.timeutil import as_utc, utc_now
from utils.validators import OTP_LENGTH, is_valid_email, is_valid_otp

logger = logging.getLogger(__name__)

MSG_INVALID_OTP = "Invalid or expired OTP"


@dataclass
class IssuedChallenge:
    email: str
    code: str
    expires_at: datetime
    is_default_code: bool


def _validate_email(email: str) -> None:
    if not email:
        raise ValidationError("Email is required")
    if not is_valid_email(email):
        raise ValidationError("Invalid email format")


class OtpService:
    def __init__(
        self,
        default_code: str = "123456",
        ttl: timedelta = timedelta(minutes=10),
        clock: Callable[[], datetime] = utc_now,
    ):
        self._default_code = default_code
        self._ttl = ttl
        self._clock = clock

    def _next_code(self) -> str:
        if self._default_code:
            return self._default_code
        return "".join(secrets.choice("0123456789") for _ in range(OTP_LENGTH))

    async def issue(self, session: AsyncSession, email: str) -> IssuedChallenge:
        _validate_email(email)
        now = self._clock()
        with database_errors("issue_otp", "Failed to create OTP verification", email=email):
            await ensure_account(session, email, now)
            challenge = OtpChallenge(
                id=str(uuid.uuid4()),
                email=email,
                code=self._next_code(),
                expires_at=now + self._ttl,
                verified=False,
                created_at=now,
            )
            session.add(challenge)
            await session.flush()
        logger.info("Issued OTP challenge for %s (expires %s)", email, challenge.expires_at.isoformat())
        return IssuedChallenge(
            email=email,
            code=challenge.code,
            expires_at=challenge.expires_at,
            is_default_code=bool(self._default_code),
        )

    async def redeem(self, session: AsyncSession, email: str, code: str) -> Account:
        # Only presence is checked; a malformed email simply matches no challenge.
        if not email:
            raise ValidationError("Email is required")
        if not code:
            raise ValidationError("OTP is required")
        if not is_valid_otp(code):
            raise ValidationError("Invalid OTP format")

        with database_errors("redeem_otp", email=email):
            result = await session.execute(
                select(OtpChallenge)
                .where(
                    OtpChallenge.email == email,
                    OtpChallenge.code == code,
                    OtpChallenge.verified.is_(False),
                )
                .order_by(OtpChallenge.created_at.desc())
                .limit(1)
            )
            challenge = result.scalar_one_or_none()
            if challenge is None:
                logger.warning("OTP redemption rejected for %s: no open challenge", email)
                raise AuthError(MSG_INVALID_OTP)
            if self._clock() > as_utc(challenge.expires_at):
                logger.warning("OTP redemption rejected for %s: challenge %s expired", email, challenge.id)
                raise AuthError(MSG_INVALID_OTP)

            # Conditional flip so two concurrent redemptions cannot both succeed.
            flipped = await session.execute(
                update(OtpChallenge)
                .where(OtpChallenge.id == challenge.id, OtpChallenge.verified.is_(False))
                .values(verified=True)
                .execution_options(synchronize_session=False)
            )
            if flipped.rowcount != 1:
                raise AuthError(MSG_INVALID_OTP)

            account = await get_account_by_email(session, email)
        if account is None:
            raise NotFoundError("User not found")
        return account
