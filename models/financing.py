from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func

from database import Base

FINANCING_STATUSES = ("pending", "approved", "rejected", "disbursed")


class FinancingRequest(Base):
    __tablename__ = "financing_requests"

    id = Column(String(64), primary_key=True, index=True)
    account_id = Column(String(64), ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(18, 2), nullable=False)
    purpose = Column(Text, nullable=False)
    # Months
    repayment_period = Column(Integer, nullable=False)
    status = Column(String(32), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
