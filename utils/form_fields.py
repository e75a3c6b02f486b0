"""
Request body reading for endpoints that accept JSON, multipart or url-encoded bodies.

Clients submit the same field under different names: nested (`personal[full_name]`),
flat (`personal_full_name`) or bare (`full_name`). Every lookup goes through
`candidate_keys`, which lists them in that precedence order; the first non-empty
value wins. JSON bodies are flattened to the nested form so one lookup serves both.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from services.errors import ValidationError

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def candidate_keys(name: str, parent: Optional[str] = None) -> list[str]:
    if parent is None:
        return [name]
    return [f"{parent}[{name}]", f"{parent}_{name}", name]


def _flatten(payload: dict[str, Any]) -> dict[str, Any]:
    """{"personal": {"full_name": "A"}} -> {"personal[full_name]": "A"}; scalars kept as-is."""
    out: dict[str, Any] = {}
    for key, value in payload.items():
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                if not isinstance(sub_value, (dict, list)):
                    out[f"{key}[{sub_key}]"] = sub_value
        elif not isinstance(value, list):
            out[key] = value
    return out


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (bool, UploadFile)):
        return ""
    return str(value).strip()


@dataclass
class RequestBody:
    values: dict[str, Any] = field(default_factory=dict)
    files: dict[str, UploadFile] = field(default_factory=dict)

    def get(self, name: str, parent: Optional[str] = None) -> str:
        for key in candidate_keys(name, parent):
            value = _as_text(self.values.get(key))
            if value:
                return value
        return ""

    def file(self, key: str) -> Optional[UploadFile]:
        return self.files.get(key)


async def read_request_body(request: Request) -> RequestBody:
    """Detect the body encoding from Content-Type; JSON is the fallback."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except Exception as exc:
            raise ValidationError("Invalid form data") from exc
        body = RequestBody()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename and key not in body.files:
                    body.files[key] = value
            elif key not in body.values:
                body.values[key] = value
        return body

    try:
        payload = await request.json()
    except ValueError as exc:
        raise ValidationError("Invalid request body") from exc
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body")
    return RequestBody(values=_flatten(payload))
