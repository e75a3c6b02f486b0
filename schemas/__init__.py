from schemas.auth import OtpIssuedResponse, SendOtpRequest, VerifyOtpRequest, VerifyOtpResponse
from schemas.financing import FinancingRequestIn, FinancingRequestResponse
from schemas.registration import (
    AccountStatus,
    BusinessDetailsIn,
    BusinessDetailsResponse,
    FullRegistrationIn,
    FullRegistrationResponse,
    PersonalDetailsIn,
    PersonalDetailsResponse,
    RegistrationSummary,
    TradeLicenseIn,
    TradeLicenseResponse,
    UserDataResponse,
)

__all__ = [
    "SendOtpRequest",
    "VerifyOtpRequest",
    "OtpIssuedResponse",
    "VerifyOtpResponse",
    "PersonalDetailsIn",
    "BusinessDetailsIn",
    "TradeLicenseIn",
    "FullRegistrationIn",
    "PersonalDetailsResponse",
    "BusinessDetailsResponse",
    "TradeLicenseResponse",
    "AccountStatus",
    "RegistrationSummary",
    "FullRegistrationResponse",
    "UserDataResponse",
    "FinancingRequestIn",
    "FinancingRequestResponse",
]
