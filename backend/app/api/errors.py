from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.core.logging import logger
from app.schemas.envelope import wrap_error
from app.services.work_items import WorkItemError


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        logger.info("request_validation_failed", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=wrap_error(
                _request_id(request),
                "Validation error",
                status.HTTP_400_BAD_REQUEST,
                details=jsonable_encoder(exc.errors()),
            ),
        )

    @app.exception_handler(HTTPException)
    async def _http_error(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=wrap_error(_request_id(request), str(exc.detail), exc.status_code),
            headers=exc.headers,
        )

    @app.exception_handler(WorkItemError)
    async def _work_item_error(request: Request, exc: WorkItemError):
        logger.info("work_item_rejected", status=exc.status_code, message=exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=wrap_error(_request_id(request), exc.message, exc.status_code),
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception("unhandled_error", path=request.url.path, error=str(exc))
        # sent from ServerErrorMiddleware, outside RequestIDMiddleware
        headers = {}
        request_id = _request_id(request)
        correlation_id = getattr(request.state, "correlation_id", None)
        if request_id:
            headers["X-Request-ID"] = request_id
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=wrap_error(request_id, "Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR),
            headers=headers,
        )
