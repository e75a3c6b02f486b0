from models.account import Account, OtpChallenge
from models.financing import FINANCING_STATUSES, FinancingRequest
from models.registration import BusinessDetails, PersonalDetails, TradeLicense

__all__ = [
    "Account",
    "OtpChallenge",
    "PersonalDetails",
    "BusinessDetails",
    "TradeLicense",
    "FinancingRequest",
    "FINANCING_STATUSES",
]
