"""Exception handlers.

Every failure leaves the API as ``{"error": "<message>"}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import ApiError, StoreError
from app.services.logger import get_logger

logger = get_logger(__name__)


def first_error_message(errors) -> str:
    """
    Turns the first pydantic error into a short field-quoted message,
    e.g. '"email" is required' or '"password" is not allowed to be empty'.
    """
    if not errors:
        return "Invalid request"

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "value"
    kind = first.get("type", "")
    msg = first.get("msg", "is invalid")

    if kind == "missing":
        return f'"{field}" is required'
    if kind == "string_too_short":
        return f'"{field}" is not allowed to be empty'
    if kind == "string_type":
        return f'"{field}" must be a string'
    if kind == "extra_forbidden":
        return f'"{field}" is not allowed'
    if kind in ("model_type", "dict_type"):
        return f'"{field}" must be of type object'
    if kind == "json_invalid":
        return "Request body is not valid JSON"
    if "email address" in msg:
        return f'"{field}" must be a valid email'
    return f'"{field}" {msg[0].lower() + msg[1:] if msg else "is invalid"}'


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if isinstance(exc, StoreError):
            logger.error("Store failure on %s (%s)", request.url.path, exc.operation)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": first_error_message(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        # Never leak internals
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": StoreError.default_message},
        )
