"""Exception handlers with request_id in responses."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.foodservice.core.logging import get_logger
from src.foodservice.crud.errors import (
    ConflictError,
    CrudError,
    HookError,
    NotFoundOrForbiddenError,
    PermissionDeniedError,
    TenantContextRequiredError,
    ValidationError,
)

logger = get_logger(__name__)

CRUD_ERROR_STATUS: dict[type[CrudError], int] = {
    ValidationError: 422,
    NotFoundOrForbiddenError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    HookError: status.HTTP_400_BAD_REQUEST,
    TenantContextRequiredError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
}


def status_for(exc: CrudError) -> int:
    for cls in type(exc).__mro__:
        if cls in CRUD_ERROR_STATUS:
            return CRUD_ERROR_STATUS[cls]
    return status.HTTP_400_BAD_REQUEST


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = ValidationError.from_pydantic(exc)
        return JSONResponse(
            status_code=422,
            content={
                "detail": errors.message,
                "errors": errors.errors,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(CrudError)
    async def crud_exception_handler(request: Request, exc: CrudError) -> JSONResponse:
        content: dict[str, object] = {"detail": exc.message}
        if isinstance(exc, ValidationError):
            content["errors"] = exc.errors
        if isinstance(exc, HookError):
            content["stage"] = exc.stage
            content["committed"] = exc.committed
            if exc.record_id:
                content["id"] = exc.record_id
        content["request_id"] = correlation_id.get()
        return JSONResponse(status_code=status_for(exc), content=content)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
