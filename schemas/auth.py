from typing import Literal

from pydantic import BaseModel


class SendOtpRequest(BaseModel):
    email: str = ""


class VerifyOtpRequest(BaseModel):
    email: str = ""
    otp: str = ""


class OtpIssuedResponse(BaseModel):
    email: str
    message: str


class VerifyOtpResponse(BaseModel):
    token: str
    user_id: str
    email: str
    account_status: Literal["new", "old"]
