"""
JSON envelope shared by every endpoint: {success, message, status_code, data?}.
Success responses always carry `data` (possibly null); errors never do.
"""
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "message": message,
            "status_code": status_code,
            "data": jsonable_encoder(data),
        },
    )


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "status_code": status_code,
        },
    )
