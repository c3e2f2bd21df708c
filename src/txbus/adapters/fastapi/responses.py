"""FastAPI adapter – turn a dispatch Result into a JSON response.

Body schema::

    {"success": true, "value": ...}
    {"success": false, "error": {"code": 404, "title": "Not Found", "detail": "..."}}

The HTTP status is *success_status* for ``Success`` and ``error.status`` for
``Failure``.
"""
from __future__ import annotations

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from txbus.kernel.types import Result, Success


def result_response(result: Result[Any], *, success_status: int = 200) -> JSONResponse:
    if isinstance(result, Success):
        status = success_status
    else:
        status = result.error.status
    return JSONResponse(status_code=status, content=jsonable_encoder(result.to_dict()))


__all__ = ["result_response"]
