"""Exception handlers: every failure is rendered as {"status": "error", "error": <message>}."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from authapi.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_body(message: str) -> dict[str, str]:
    return ErrorResponse(error=message).model_dump()


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    # loc looks like ("body", "password") or ("path", "user_id"); report the innermost name.
    names = [str(part) for part in loc if part not in ("body", "path", "query", "header")]
    return names[-1] if names else "body"


def format_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Join pydantic errors into one readable message."""
    messages: list[str] = []
    for err in errors:
        err_type = err.get("type", "")
        field = _field_name(err.get("loc", ()))
        if err_type == "json_invalid":
            messages.append("failed to decode request body")
        elif err_type == "missing":
            messages.append(f"field {field} is required")
        elif err_type == "value_error" and "error" in err.get("ctx", {}):
            messages.append(str(err["ctx"]["error"]))
        else:
            messages.append(f"field {field} is invalid")
    return ", ".join(dict.fromkeys(messages)) or "invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(format_validation_errors(list(exc.errors()))),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
