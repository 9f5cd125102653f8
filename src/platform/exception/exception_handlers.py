from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, PersistenceError
from src.platform.logging.loguru_io import Logger

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _describe_request_errors(errors: Any) -> str:
    """[{'loc': ('body', 'tickets'), 'msg': 'Field required'}] -> 'tickets: Field required'"""
    parts = []
    for error in errors:
        location = '.'.join(str(part) for part in error.get('loc', ())[1:])
        parts.append(f'{location}: {error["msg"]}' if location else error['msg'])
    return '; '.join(parts) or 'Invalid request'


async def booking_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ledger and persistence errors -> {'detail': message} with the error's own status."""
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    if isinstance(error, PersistenceError):
        Logger.base.error(f'💾 [HTTP] {request.method} {request.url.path}: {error.message}')
    else:
        Logger.base.info(
            f'🚫 [HTTP] {request.method} {request.url.path} -> {error.status_code}: '
            f'{error.message}'
        )
    return JSONResponse(status_code=error.status_code, content={'detail': error.message})


async def request_validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Malformed body or query (missing field, wrong JSON type); booking rules land above
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': _describe_request_errors(errors)},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(f'Unhandled error on {request.method} {request.url.path}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: booking_error_handler,
    RequestValidationError: request_validation_error_handler,
    Exception: unexpected_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
