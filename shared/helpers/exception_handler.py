import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

ENVELOPE_KEYS = {"status", "status_code", "message"}


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return "; ".join(parts) or "Invalid request"


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # error_response() already built the envelope
        if isinstance(exc.detail, dict) and ENVELOPE_KEYS.issubset(exc.detail.keys()):
            wrapped = exc.detail
        else:
            wrapped = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(exc.status_code or AppStatusCode.OPERATION_FAILED),
                message=str(exc.detail)
            ).model_dump()
        return JSONResponse(
            content=wrapped,
            status_code=exc.status_code or 400,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message=_format_validation_errors(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=400)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.DATABASE_ERROR,
            message="Database operation failed"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.OPERATION_FAILED,
            message="Internal server error"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
