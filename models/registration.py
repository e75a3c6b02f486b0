from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func

from database import Base


class PersonalDetails(Base):
    __tablename__ = "personal_details"

    id = Column(String(64), primary_key=True, index=True)
    account_id = Column(String(64), ForeignKey("accounts.id", ondelete="CASCADE"), unique=True, nullable=False)
    full_name = Column(String(256), nullable=False)
    email = Column(String(320), nullable=False)
    phone_number = Column(String(32), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class BusinessDetails(Base):
    __tablename__ = "business_details"

    id = Column(String(64), primary_key=True, index=True)
    account_id = Column(String(64), ForeignKey("accounts.id", ondelete="CASCADE"), unique=True, nullable=False)
    business_name = Column(String(256), nullable=False)
    trade_license_number = Column(String(128), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TradeLicense(Base):
    __tablename__ = "trade_licenses"

    id = Column(String(64), primary_key=True, index=True)
    account_id = Column(String(64), ForeignKey("accounts.id", ondelete="CASCADE"), unique=True, nullable=False)
    filename = Column(String(512), nullable=False)
    file_url = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
