from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse
from fastapi import Request
from shared.core.schemas import JsonOutResult
from typing import Callable, Any
import json

LIST_KEYS = {"items", "transactions", "users",
             "top_categories", "recent_products"}


def replace_nulls_with_empty(value: Any):
    """
    Recursively replaces None based on expected structure:
    - List fields -> []
    - Primitives -> ""
    """
    if isinstance(value, dict):
        cleaned = {}
        for k, v in value.items():
            if v is None and k.lower() in LIST_KEYS:
                cleaned[k] = []
            else:
                cleaned[k] = replace_nulls_with_empty(v)
        return cleaned

    elif isinstance(value, list):
        return [replace_nulls_with_empty(v) for v in value]

    elif value is None:
        return ""

    return value


def _copy_headers(response) -> dict:
    return {k: v for k, v in response.headers.items() if k.lower() != "content-length"}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        # Plain text, HTML and file responses pass through untouched
        if "application/json" not in response.headers.get("content-type", ""):
            return response

        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        try:
            data = json.loads(body_bytes.decode("utf-8")) if body_bytes else None
        except ValueError:
            return JSONResponse(content=None, status_code=response.status_code,
                                headers=_copy_headers(response))

        already_wrapped = isinstance(data, dict) and {
            "status", "status_code", "message"}.issubset(data.keys())

        if already_wrapped:
            return JSONResponse(
                content=replace_nulls_with_empty(data),
                status_code=response.status_code,
                headers=_copy_headers(response),
            )

        # Error responses that bypassed the exception handlers
        if not (200 <= response.status_code < 400):
            message = ""
            if isinstance(data, dict):
                message = str(data.get("detail") or data.get("message") or "")
            elif isinstance(data, str):
                message = data

            wrapped_error = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(response.status_code),
                message=message or "An unexpected error occurred",
            ).model_dump()

            return JSONResponse(
                content=replace_nulls_with_empty(wrapped_error),
                status_code=response.status_code,
                headers=_copy_headers(response),
            )

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=str(response.status_code),
            message="Data retrieved successfully"
        ).model_dump()

        return JSONResponse(
            content=replace_nulls_with_empty(wrapped),
            status_code=response.status_code,
            headers=_copy_headers(response),
        )
