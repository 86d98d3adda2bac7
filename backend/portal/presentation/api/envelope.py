"""Response envelope helpers.

Success: ``{success: true, data, timestamp}``.
Error:   ``{success: false, error, code, timestamp}`` plus ``details`` for
validation failures.
"""

from typing import Any

from fastapi.responses import JSONResponse

from portal.application.schemas import ApiResponse, ErrorResponse, FieldErrorSchema
from portal.domain.exceptions import FieldError


def ok(data: Any = None) -> ApiResponse:
    return ApiResponse(data=data)


def error_response(
    status_code: int,
    message: str,
    code: str,
    details: list[FieldError] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=message,
        code=code,
        details=[FieldErrorSchema(**d.to_dict()) for d in details] if details else None,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
