from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(data: Any = None, message: str = "Success", status_code: int = 200) -> JSONResponse:
    content = {"success": True, "message": message, "data": jsonable_encoder(data)}
    return JSONResponse(status_code=status_code, content=content)


def error_response(status_code: int = 500, message: str = "Something went wrong", errors: list | None = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message, "data": None}
    if errors:
        content["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=content)
