"""Input format checks shared by the auth, registration and financing services."""
import re
from pathlib import PurePath

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"[0-9]{10,15}")
OTP_LENGTH = 6
OTP_PATTERN = re.compile(r"[0-9]{%d}" % OTP_LENGTH)

_PHONE_FORMATTING = str.maketrans("", "", " -()")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def normalize_phone(phone: str) -> str:
    """Strip spaces, hyphens and parentheses."""
    return phone.translate(_PHONE_FORMATTING)


def is_valid_phone(phone: str) -> bool:
    return PHONE_PATTERN.fullmatch(normalize_phone(phone)) is not None


def is_valid_otp(code: str) -> bool:
    return OTP_PATTERN.fullmatch(code) is not None


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot; '' when there is none."""
    return PurePath(filename).suffix.lower().lstrip(".")


def is_allowed_file_type(filename: str, allowed: tuple[str, ...]) -> bool:
    ext = file_extension(filename)
    return bool(ext) and ext in {a.lower() for a in allowed}


def is_valid_file_size(size: int, max_size_mb: int) -> bool:
    return 0 < size <= max_size_mb * 1024 * 1024
