"""
Trade license uploads to a Supabase storage bucket over its REST API.
Returns the public object URL that is stored on the trade license record.
"""
from __future__ import annotations

import logging
import mimetypes
import time
import uuid
from pathlib import PurePath
from typing import Optional

import httpx

from config import Settings
from services.errors import StorageError

logger = logging.getLogger(__name__)


class SupabaseStorage:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        bucket: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.bucket = bucket
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseStorage":
        return cls(
            base_url=settings.supabase_url,
            api_key=settings.storage_key,
            bucket=settings.supabase_bucket_name,
            timeout=settings.upload_timeout_seconds,
        )

    def public_url(self, object_name: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{object_name}"

    async def upload(self, content: bytes, filename: str) -> str:
        if not self.base_url:
            raise StorageError("Failed to upload file: SUPABASE_URL environment variable is required")
        if not self.api_key:
            raise StorageError(
                "Failed to upload file: SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY environment variable is required"
            )

        object_name = f"{uuid.uuid4()}_{int(time.time())}{PurePath(filename).suffix.lower()}"
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": content_type,
            "x-upsert": "true",
        }
        upload_url = f"{self.base_url}/storage/v1/object/{self.bucket}/{object_name}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                resp = await client.post(upload_url, content=content, headers=headers)
            except httpx.HTTPError as e:
                logger.exception("Upload of %s to bucket %s failed", filename, self.bucket)
                raise StorageError(f"Failed to upload file: {e}") from e

        if resp.status_code not in (200, 201):
            logger.error("Upload of %s rejected: %s - %s", filename, resp.status_code, resp.text)
            raise StorageError(f"Failed to upload file: upload failed with status {resp.status_code}: {resp.text}")
        logger.info("Uploaded %s as %s", filename, object_name)
        return self.public_url(object_name)
