"""
Registration aggregate: personal details, business details and trade license, at most one
of each per account. Every write is a single INSERT ... ON CONFLICT (account_id) DO UPDATE,
so a repeated submission overwrites in place (last write wins) instead of appending.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from database import dialect_insert
from models import BusinessDetails, PersonalDetails, TradeLicense
from schemas.registration import (
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
from services.accounts import require_account
from services.completion import get_account_status
from services.errors import ValidationError, database_errors
from services.storage import SupabaseStorage
from utils.timeutil import utc_now
from utils.validators import is_allowed_file_type, is_valid_email, is_valid_file_size, is_valid_phone

logger = logging.getLogger(__name__)

ALLOWED_LICENSE_TYPES = ("pdf", "jpg", "jpeg", "png")


@dataclass
class TradeLicenseUpload:
    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def validate_personal(data: PersonalDetailsIn) -> None:
    if not data.full_name:
        raise ValidationError("Full name is required")
    if not data.email:
        raise ValidationError("Email is required")
    if not is_valid_email(data.email):
        raise ValidationError("Invalid email format")
    if not data.phone_number:
        raise ValidationError("Phone number is required")
    if not is_valid_phone(data.phone_number):
        raise ValidationError("Invalid phone number format")


def validate_business(data: BusinessDetailsIn) -> None:
    if not data.business_name:
        raise ValidationError("Business name is required")
    if not data.trade_license_number:
        raise ValidationError("Trade license number is required")


def validate_trade_license(data: TradeLicenseIn, has_upload: bool = False) -> None:
    if not data.filename:
        raise ValidationError("Filename is required")
    if not data.file_url and not has_upload:
        raise ValidationError("File URL is required (or upload a file)")


def validate_upload(upload: TradeLicenseUpload, max_size_mb: int) -> None:
    if not is_allowed_file_type(upload.filename, ALLOWED_LICENSE_TYPES):
        raise ValidationError("Invalid file type. Only PDF, JPG, and PNG files are allowed")
    if not is_valid_file_size(upload.size, max_size_mb):
        raise ValidationError(f"File size exceeds {max_size_mb}MB limit")


class RegistrationService:
    def __init__(
        self,
        storage: SupabaseStorage,
        max_upload_mb: int = 10,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._storage = storage
        self._max_upload_mb = max_upload_mb
        self._clock = clock

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_mb * 1024 * 1024

    async def _upsert(self, session: AsyncSession, model, account_id: str, values: dict[str, Any]):
        now = self._clock()
        stmt = (
            dialect_insert(session, model)
            .values(id=str(uuid.uuid4()), account_id=account_id, created_at=now, updated_at=now, **values)
            .on_conflict_do_update(index_elements=["account_id"], set_={**values, "updated_at": now})
        )
        await session.execute(stmt)
        result = await session.execute(
            select(model).where(model.account_id == account_id).execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def _get(self, session: AsyncSession, model, account_id: str):
        result = await session.execute(select(model).where(model.account_id == account_id))
        return result.scalar_one_or_none()

    async def _write_personal(self, session, account_id: str, data: PersonalDetailsIn) -> PersonalDetails:
        with database_errors("upsert_personal_details", "Failed to save personal details", account_id=account_id):
            return await self._upsert(session, PersonalDetails, account_id, data.model_dump())

    async def _write_business(self, session, account_id: str, data: BusinessDetailsIn) -> BusinessDetails:
        with database_errors("upsert_business_details", "Failed to save business details", account_id=account_id):
            return await self._upsert(session, BusinessDetails, account_id, data.model_dump())

    async def _write_trade_license(self, session, account_id: str, data: TradeLicenseIn) -> TradeLicense:
        with database_errors("upsert_trade_license", "Failed to save trade license", account_id=account_id):
            return await self._upsert(session, TradeLicense, account_id, data.model_dump())

    async def upsert_personal(self, session: AsyncSession, account_id: str, data: PersonalDetailsIn) -> PersonalDetails:
        validate_personal(data)
        return await self._write_personal(session, account_id, data)

    async def upsert_business(self, session: AsyncSession, account_id: str, data: BusinessDetailsIn) -> BusinessDetails:
        validate_business(data)
        return await self._write_business(session, account_id, data)

    async def upsert_trade_license(
        self,
        session: AsyncSession,
        account_id: str,
        data: TradeLicenseIn,
        upload: Optional[TradeLicenseUpload] = None,
    ) -> TradeLicense:
        data = await self._resolve_trade_license(data, upload)
        return await self._write_trade_license(session, account_id, data)

    async def _resolve_trade_license(
        self, data: TradeLicenseIn, upload: Optional[TradeLicenseUpload]
    ) -> TradeLicenseIn:
        """Validate, then upload the file if one was sent; the upload's URL replaces any given URL."""
        if upload is not None:
            data = data.model_copy(update={"filename": upload.filename})
        validate_trade_license(data, has_upload=upload is not None)
        if upload is None:
            return data
        validate_upload(upload, self._max_upload_mb)
        file_url = await self._storage.upload(upload.content, upload.filename)
        return data.model_copy(update={"file_url": file_url})

    async def full_registration(
        self,
        session: AsyncSession,
        account_id: str,
        registration: FullRegistrationIn,
        upload: Optional[TradeLicenseUpload] = None,
    ) -> FullRegistrationResponse:
        """
        All three sub-records as one unit: every field is validated before the file is
        uploaded, and the file is uploaded before anything is written, so a rejected
        submission leaves neither rows nor orphaned uploads behind.
        """
        validate_personal(registration.personal)
        validate_business(registration.business)
        with database_errors("full_registration", account_id=account_id):
            await require_account(session, account_id)
        trade = await self._resolve_trade_license(registration.trade, upload)

        personal = await self._write_personal(session, account_id, registration.personal)
        business = await self._write_business(session, account_id, registration.business)
        license_ = await self._write_trade_license(session, account_id, trade)
        await session.flush()

        status = await get_account_status(session, account_id)
        logger.info("Saved full registration for account %s (status=%s)", account_id, status.status)
        return FullRegistrationResponse(
            personal=PersonalDetailsResponse.from_model(personal),
            business=BusinessDetailsResponse.from_model(business),
            trade=TradeLicenseResponse.from_model(license_),
            status=status.status,
            summary=await self.summary(session, account_id),
        )

    async def summary(self, session: AsyncSession, account_id: str) -> Optional[RegistrationSummary]:
        """All three sub-records, or None while any is missing."""
        with database_errors("registration_summary", "Failed to get registration summary", account_id=account_id):
            personal = await self._get(session, PersonalDetails, account_id)
            business = await self._get(session, BusinessDetails, account_id)
            license_ = await self._get(session, TradeLicense, account_id)
        if personal is None or business is None or license_ is None:
            return None
        return RegistrationSummary(
            personal_info=PersonalDetailsResponse.from_model(personal),
            business_info=BusinessDetailsResponse.from_model(business),
            trade_license=TradeLicenseResponse.from_model(license_),
        )

    async def snapshot(self, session: AsyncSession, account_id: str) -> UserDataResponse:
        with database_errors("user_data", account_id=account_id):
            account = await require_account(session, account_id)
            personal = await self._get(session, PersonalDetails, account_id)
            business = await self._get(session, BusinessDetails, account_id)
            license_ = await self._get(session, TradeLicense, account_id)
        status = await get_account_status(session, account_id)
        return UserDataResponse(
            user_id=account.id,
            email=account.email,
            status=status.status,
            personal=PersonalDetailsResponse.from_model(personal) if personal else None,
            business=BusinessDetailsResponse.from_model(business) if business else None,
            trade_license=TradeLicenseResponse.from_model(license_) if license_ else None,
        )
