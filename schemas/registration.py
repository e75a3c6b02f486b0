from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from utils.form_fields import RequestBody
from utils.timeutil import as_utc


class PersonalDetailsIn(BaseModel):
    full_name: str = ""
    email: str = ""
    phone_number: str = ""


class BusinessDetailsIn(BaseModel):
    business_name: str = ""
    trade_license_number: str = ""


class TradeLicenseIn(BaseModel):
    filename: str = ""
    file_url: str = ""


class FullRegistrationIn(BaseModel):
    personal: PersonalDetailsIn = Field(default_factory=PersonalDetailsIn)
    business: BusinessDetailsIn = Field(default_factory=BusinessDetailsIn)
    trade: TradeLicenseIn = Field(default_factory=TradeLicenseIn)

    @classmethod
    def from_body(cls, body: RequestBody) -> "FullRegistrationIn":
        """Resolve every field through the nested/flat/bare naming fallbacks."""
        def section(model: type[BaseModel], parent: str) -> Any:
            return model(**{name: body.get(name, parent) for name in model.model_fields})

        return cls(
            personal=section(PersonalDetailsIn, "personal"),
            business=section(BusinessDetailsIn, "business"),
            trade=section(TradeLicenseIn, "trade"),
        )


class _SubRecordResponse(BaseModel):
    @classmethod
    def from_model(cls, obj: Any):
        """Map a registration row to its response; the owning account is exposed as user_id."""
        values = {name: getattr(obj, "account_id" if name == "user_id" else name) for name in cls.model_fields}
        values["created_at"] = as_utc(values["created_at"])
        values["updated_at"] = as_utc(values["updated_at"])
        return cls(**values)


class PersonalDetailsResponse(_SubRecordResponse):
    id: str
    user_id: str
    full_name: str
    email: str
    phone_number: str
    created_at: datetime
    updated_at: datetime


class BusinessDetailsResponse(_SubRecordResponse):
    id: str
    user_id: str
    business_name: str
    trade_license_number: str
    created_at: datetime
    updated_at: datetime


class TradeLicenseResponse(_SubRecordResponse):
    id: str
    user_id: str
    filename: str
    file_url: str
    created_at: datetime
    updated_at: datetime


class AccountStatus(BaseModel):
    """Derived on every read from which registration sub-records exist; never stored."""
    user_id: str
    email: str
    status: Literal["new", "old"]
    has_personal_details: bool
    has_business_details: bool
    has_trade_license: bool
    is_complete: bool


class RegistrationSummary(BaseModel):
    personal_info: PersonalDetailsResponse
    business_info: BusinessDetailsResponse
    trade_license: TradeLicenseResponse


class FullRegistrationResponse(BaseModel):
    personal: PersonalDetailsResponse
    business: BusinessDetailsResponse
    trade: TradeLicenseResponse
    status: Literal["new", "old"]
    summary: Optional[RegistrationSummary] = None


class UserDataResponse(BaseModel):
    user_id: str
    email: str
    status: Literal["new", "old"]
    personal: Optional[PersonalDetailsResponse] = None
    business: Optional[BusinessDetailsResponse] = None
    trade_license: Optional[TradeLicenseResponse] = None
