from sqlalchemy import Boolean, Column, DateTime, String, func

from database import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class OtpChallenge(Base):
    __tablename__ = "otp_challenges"

    id = Column(String(64), primary_key=True, index=True)
    # Matched by email string; a challenge may precede its account.
    email = Column(String(320), nullable=False, index=True)
    code = Column(String(16), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
