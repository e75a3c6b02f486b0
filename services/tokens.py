from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable

import jwt

from services.errors import AuthError
from utils.timeutil import utc_now

ALGORITHM = "HS256"
MSG_INVALID_TOKEN = "Invalid or expired token"


@dataclass(frozen=True)
class SessionClaims:
    account_id: str
    email: str


class TokenIssuer:
    """Signs and verifies the bearer tokens handed out after OTP redemption."""

    def __init__(
        self,
        secret: str,
        expiry_hours: int = 24,
        issuer: str = "sme-financing-api",
        clock: Callable[[], datetime] = utc_now,
    ):
        self._secret = secret
        self._expiry = timedelta(hours=expiry_hours)
        self._issuer = issuer
        self._clock = clock

    def issue(self, account_id: str, email: str) -> str:
        now = self._clock()
        claims = {
            "user_id": account_id,
            "email": email,
            "iss": self._issuer,
            "iat": now,
            "nbf": now,
            "exp": now + self._expiry,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> SessionClaims:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss", "user_id", "email"]},
            )
        except jwt.PyJWTError as exc:
            raise AuthError(MSG_INVALID_TOKEN) from exc
        return SessionClaims(account_id=str(claims["user_id"]), email=str(claims["email"]))
