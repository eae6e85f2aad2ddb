"""
예외 → HTTP 응답 변환
- InvalidInputError: 400, 본문은 필드 → 메시지 매핑
- GenerationError 500 / DuplicateError 409 / NotFoundError 404: ErrorResponse
- 그 외 예외: 500, 내부 메시지는 로그에만 남긴다
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tracking_service.exceptions import (
    DuplicateError, GenerationError, InvalidInputError, NotFoundError, TrackingServiceError,
)
from tracking_service.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[TrackingServiceError], int] = {
    InvalidInputError: 400,
    NotFoundError: 404,
    DuplicateError: 409,
    GenerationError: 500,
}


def error_response(label: str, message: str, status_code: int) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        message=message,
        error_details=label,
        status=status_code,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning(f"입력값 검증 실패 ({request.url.path}): {exc.errors}")
    return JSONResponse(status_code=400, content=exc.errors)


async def tracking_error_handler(request: Request, exc: TrackingServiceError) -> JSONResponse:
    status_code = STATUS_BY_ERROR.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{exc.label} ({request.url.path}): {exc.to_dict()}", exc_info=exc)
    else:
        logger.warning(f"{exc.label} ({request.url.path}): {exc.to_dict()}")
    return error_response(exc.label, exc.message, status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"처리되지 않은 예외 ({request.method} {request.url.path}): {type(exc).__name__}: {exc}",
        exc_info=exc,
    )
    return error_response(
        "Internal Server Error",
        "An unexpected error occurred. Please try again later.",
        500,
    )


def register_exception_handlers(app: FastAPI):
    """main.py에서 호출"""
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(TrackingServiceError, tracking_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
