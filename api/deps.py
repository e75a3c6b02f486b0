from fastapi import Request

from services.errors import AuthError
from services.financing import FinancingService
from services.otp import OtpService
from services.registration import RegistrationService
from services.tokens import SessionClaims, TokenIssuer


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_otp_service(request: Request) -> OtpService:
    return request.app.state.otp_service


def get_registration_service(request: Request) -> RegistrationService:
    return request.app.state.registration_service


def get_financing_service(request: Request) -> FinancingService:
    return request.app.state.financing_service


def get_current_session(request: Request) -> SessionClaims:
    """Resolve `Authorization: Bearer <token>` to the caller's account."""
    header = request.headers.get("Authorization")
    if not header:
        raise AuthError("Authorization header is required")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise AuthError("Invalid authorization header format")
    return get_token_issuer(request).verify(parts[1])
