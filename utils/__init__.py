"""Shared utilities for the backend."""
from utils.form_fields import RequestBody, candidate_keys, read_request_body
from utils.response import error_response, success_response
from utils.timeutil import as_utc, utc_now
from utils.validators import (
    OTP_LENGTH,
    file_extension,
    is_allowed_file_type,
    is_valid_email,
    is_valid_file_size,
    is_valid_otp,
    is_valid_phone,
    normalize_phone,
)

__all__ = [
    "RequestBody",
    "candidate_keys",
    "read_request_body",
    "success_response",
    "error_response",
    "utc_now",
    "as_utc",
    "OTP_LENGTH",
    "file_extension",
    "is_allowed_file_type",
    "is_valid_email",
    "is_valid_file_size",
    "is_valid_otp",
    "is_valid_phone",
    "normalize_phone",
]
