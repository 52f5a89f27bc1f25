"""
Exception handlers: every error leaves the API as {"ok": false, "error": ...}.

  RequestValidationError -> 400 with the first message and a flat error list
  HTTPException          -> its status code and detail (covers 404/405 from routing)
  anything else          -> 500 with a generic message; details go to the log only
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from redroute.core.logging import get_logger

logger = get_logger(__name__)

GENERIC_ERROR = "Internal server error"


def _location(loc) -> str:
    # Drop the leading "body"/"query" segment
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": _location(error.get("loc", ())), "msg": error.get("msg", "Invalid value")}
        for error in exc.errors()
    ]
    message = errors[0]["msg"] if errors else "Invalid request"
    logger.info("request_validation_failed", errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "error": message, "errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": GENERIC_ERROR},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
