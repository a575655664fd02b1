"""Response envelope helpers."""

from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: str = "OK",
    status_code: int = 200,
) -> JSONResponse:
    """Render ``{"success": true, "message": ..., "data": ...}``.

    Pydantic models are serialized by alias so camelCase fields reach clients.
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "message": message,
            "data": jsonable_encoder(data, by_alias=True),
        },
    )


def error_response(
    status_code: int,
    message: str,
    errors: Optional[List[dict]] = None,
    stack: Optional[str] = None,
    data: Any = None,
) -> JSONResponse:
    """Render ``{"success": false, "message": ..., "errors": [...]}``."""
    content = {"success": False, "message": message, "errors": errors or []}
    if data is not None:
        content["data"] = jsonable_encoder(data, by_alias=True)
    if stack is not None:
        content["stack"] = stack
    return JSONResponse(status_code=status_code, content=content)
