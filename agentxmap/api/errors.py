"""Exception handlers translating errors into the response envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agentxmap.core.exceptions import DependencyError, IdentityError
from agentxmap.core.structured_logging import log_json
from agentxmap.schemas.errors import Envelope, ErrorBody

logger = logging.getLogger(__name__)


def error_response(
    status_code: int, error: str, message: str, details: dict | None = None
) -> JSONResponse:
    body = Envelope(
        success=False,
        error=ErrorBody(error=error, message=message, details=details),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
    )


async def identity_error_handler(request: Request, exc: IdentityError) -> JSONResponse:
    level = logging.ERROR if isinstance(exc, DependencyError) else logging.INFO
    log_json(
        logger,
        level,
        "identity_error",
        path=request.url.path,
        error=exc.code,
        status_code=exc.status_code,
    )
    return error_response(exc.status_code, exc.code, exc.message, exc.details)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details: dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        details[field or "body"] = err.get("msg", "Invalid value")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "validation_error",
        "Request validation failed",
        details,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, "http_error", str(exc.detail))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IdentityError, identity_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
