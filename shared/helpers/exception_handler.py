import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def _failure(message: str, status_code: str) -> dict:
    return JsonOutResult(
        data=None,
        status="Failure",
        status_code=status_code,
        message=message or "An unexpected error occurred"
    ).model_dump()


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return "; ".join(parts)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # error_response() already packs a JsonOutResult into the detail
        if isinstance(exc.detail, dict):
            wrapped = _failure(
                str(exc.detail.get("message") or ""),
                str(exc.detail.get("status_code") or exc.status_code))
        else:
            wrapped = _failure(str(exc.detail), str(exc.status_code))
        return JSONResponse(content=wrapped, status_code=exc.status_code,
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = _failure(_format_validation_errors(exc),
                           AppStatusCode.INVALID_INPUT)
        return JSONResponse(content=wrapped, status_code=422)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        wrapped = _failure(str(exc), AppStatusCode.OPERATION_FAILED)
        return JSONResponse(content=wrapped, status_code=500)
