# todoapp/middleware/exceptions.py
"""
Translation of errors into problem-details responses.

Domain errors carry their own status; framework validation errors map
to 400; anything else becomes a 500 whose detail is only shown in
development.
"""

import logging
from http import HTTPStatus
from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from todoapp.errors import AppError
from todoapp.schemas.problem import ProblemDetails

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"
GENERIC_ERROR_DETAIL = "An error occurred while processing your request. Please try again later."


def problem_response(
    request: Request,
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    **extensions,
) -> JSONResponse:
    problem = ProblemDetails(
        title=title,
        status=status_code,
        detail=detail,
        instance=request.url.path,
        **extensions,
    )
    return JSONResponse(
        problem.model_dump(exclude_none=True),
        status_code=status_code,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError):
    logger.info("%s: %s", type(exc).__name__, exc.message)
    return problem_response(request, exc.status_code, exc.title, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in error.get("loc", ())), "message": error.get("msg", "")}
        for error in exc.errors()
    ]
    return problem_response(
        request,
        400,
        "Validation error",
        "One or more validation errors occurred.",
        errors=errors,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    try:
        title = HTTPStatus(exc.status_code).phrase
    except ValueError:
        title = "Error"
    detail = exc.detail if isinstance(exc.detail, str) else None
    return problem_response(request, exc.status_code, title, detail, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)


class UnhandledExceptionMiddleware(BaseHTTPMiddleware):
    """Last-resort 500 handler; sits inside the logging middleware so the response still gets a correlation id"""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error("An unhandled exception occurred: %s", exc, exc_info=True)
            extensions = {}
            detail = GENERIC_ERROR_DETAIL
            if self.debug:
                detail = str(exc) or GENERIC_ERROR_DETAIL
                extensions["exception"] = type(exc).__name__
            return problem_response(
                request, 500, "An internal server error occurred", detail, **extensions
            )
