"""
Maps the error taxonomy onto HTTP responses of the form {'detail': ...}
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import AuthError, CustomBaseError, StorageError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

# Extra response headers per error type
ERROR_HEADERS: dict[type[CustomBaseError], dict[str, str]] = {
    AuthError: {'WWW-Authenticate': 'Basic'},
}

GENERIC_STORAGE_MESSAGE = StorageError().message


def _public_message(error: CustomBaseError) -> str:
    # Storage failures carry the failed operation for the logs only
    return GENERIC_STORAGE_MESSAGE if isinstance(error, StorageError) else error.message


def _headers_for(error: CustomBaseError) -> dict[str, str] | None:
    for error_type, headers in ERROR_HEADERS.items():
        if isinstance(error, error_type):
            return headers
    return None


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    return JSONResponse(
        status_code=error.status_code,
        content={'detail': _public_message(error)},
        headers=_headers_for(error),
    )


def jsonable_errors(error: RequestValidationError) -> list[dict[str, Any]]:
    # ctx may carry the raw exception object, which is not JSON serializable
    return [
        {key: value for key, value in item.items() if key != 'ctx'} for item in error.errors()
    ]


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': jsonable_errors(error)},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'💥 [HTTP] {request.method} {request.url.path}: {type(exc).__name__}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
