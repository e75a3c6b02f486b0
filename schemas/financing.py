from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel

from utils.timeutil import as_utc


class FinancingRequestIn(BaseModel):
    # Raw text as submitted; parsed and range-checked by the financing service.
    amount: str = ""
    purpose: str = ""
    repayment_period: str = ""


class FinancingRequestResponse(BaseModel):
    id: str
    user_id: str
    amount: float
    purpose: str
    repayment_period: int
    status: Literal["pending", "approved", "rejected", "disbursed"]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, obj: Any) -> "FinancingRequestResponse":
        return cls(
            id=obj.id,
            user_id=obj.account_id,
            amount=float(obj.amount),
            purpose=obj.purpose,
            repayment_period=obj.repayment_period,
            status=obj.status,
            created_at=as_utc(obj.created_at),
            updated_at=as_utc(obj.updated_at),
        )
