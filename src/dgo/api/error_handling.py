from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dgo.api.middleware.request_id import get_request_id
from dgo.application.use_cases.get_menu import MenuNotFoundError
from dgo.application.use_cases.group_order_lifecycle import (
    GroupOrderNotFoundError,
    InvalidGroupOrderError,
)
from dgo.application.use_cases.publish_menu import InvalidMenuItemError, RestaurantNotFoundError
from dgo.application.use_cases.recognize_menu import InvalidImageError
from dgo.application.use_cases.restaurants import InvalidRestaurantError
from dgo.application.use_cases.submit_order import (
    GroupOrderNotOpenError,
    InvalidSubmissionError,
    MenuItemNotFoundError,
    SubmissionNotFoundError,
)


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    message = str(http_exc.detail) if http_exc.detail else "request failed"
    code = "HTTP_ERROR"
    if http_exc.status_code == 404:
        code = "NOT_FOUND"
    elif http_exc.status_code == 400:
        code = "BAD_REQUEST"
    elif http_exc.status_code == 409:
        code = "CONFLICT"
    return _error_response(
        status_code=http_exc.status_code,
        code=code,
        message=message,
    )


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    return _error_response(
        status_code=400,
        code="INVALID_REQUEST",
        message="request validation failed",
        details={"errors": validation_exc.errors()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    mappings: list[tuple[type[Exception], int, str]] = [
        (RestaurantNotFoundError, 404, "RESTAURANT_NOT_FOUND"),
        (MenuNotFoundError, 404, "MENU_NOT_FOUND"),
        (GroupOrderNotFoundError, 404, "GROUP_ORDER_NOT_FOUND"),
        (SubmissionNotFoundError, 404, "SUBMISSION_NOT_FOUND"),
        (GroupOrderNotOpenError, 409, "GROUP_ORDER_LOCKED"),
        (MenuItemNotFoundError, 400, "MENU_ITEM_NOT_FOUND"),
        (InvalidMenuItemError, 400, "INVALID_MENU_ITEM"),
        (InvalidImageError, 400, "INVALID_IMAGE"),
        (InvalidRestaurantError, 400, "INVALID_REQUEST"),
        (InvalidGroupOrderError, 400, "INVALID_REQUEST"),
        (InvalidSubmissionError, 400, "INVALID_REQUEST"),
    ]

    for exc_cls, status_code, code in mappings:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
