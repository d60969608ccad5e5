"""Error taxonomy of the review API and the handlers that render it.

Every failure leaves the service as an ``ApiResult`` body; nothing is allowed
to surface as a bare protocol error.
"""
from __future__ import annotations
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docreview.app.schemas.common import ApiResult

log = logging.getLogger(__name__)

SUCCESS_CODE = 200
PERMISSION_DENIED_CODE = 403
PARAMS_ERROR_CODE = 1006
SYSTEM_ERROR_CODE = 500

SUCCESS_MESSAGE = "success"
PARAMS_FORMAT_ERROR = "parameter format error"
PERMISSION_DENIED = "permission denied"
SYSTEM_ERROR = "system error"


class ReviewApiError(Exception):
    code: int = SYSTEM_ERROR_CODE
    message: str = SYSTEM_ERROR
    status_code: int = 500

    def __init__(self, message: Optional[str] = None, *, code: Optional[int] = None,
                 status_code: Optional[int] = None, data: Any = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.data = data

    def to_result(self) -> ApiResult:
        return ApiResult(code=self.code, message=self.message, data=self.data)


class PermissionDeniedError(ReviewApiError):
    code = PERMISSION_DENIED_CODE
    message = PERMISSION_DENIED
    status_code = 403


class ParamsError(ReviewApiError):
    code = PARAMS_ERROR_CODE
    message = PARAMS_FORMAT_ERROR
    status_code = 400


class ServiceError(ReviewApiError):
    """Raised by a review service; code and message are passed through as given."""


def _render(result: ApiResult, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))


async def review_api_error_handler(request: Request, exc: ReviewApiError) -> JSONResponse:
    return _render(exc.to_result(), exc.status_code)


def invalid_fields(errors) -> list:
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in errors]
    return [f for f in fields if f]


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("request rejected by validation", extra={"path": request.url.path})
    err = ParamsError(data={"fields": invalid_fields(exc.errors())})
    return _render(err.to_result(), err.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("unhandled error", exc_info=exc, extra={"path": request.url.path})
    return _render(ApiResult(code=SYSTEM_ERROR_CODE, message=SYSTEM_ERROR), 500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReviewApiError, review_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
