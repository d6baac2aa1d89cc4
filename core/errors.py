"""Error kinds shared by every domain and their translation to HTTP responses."""

import logging
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    BAD_USER_INPUT = "BAD_USER_INPUT"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    UN_AUTHORIZED = "UN_AUTHORIZED"
    UN_AUTHENTICATED = "UN_AUTHENTICATED"


DEFAULT_MESSAGES = {
    ErrorKind.BAD_USER_INPUT: "Bad input",
    ErrorKind.BAD_REQUEST: "Bad request",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.UN_AUTHORIZED: "Un-authorized",
    ErrorKind.UN_AUTHENTICATED: "Un-authenticated",
}

HTTP_STATUS = {
    ErrorKind.BAD_USER_INPUT: 422,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UN_AUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.UN_AUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
}


class AppError(Exception):
    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        super().__init__(self.message)


class ExternalServiceError(Exception):
    """A wallet, upload or stream service call failed."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


def bad_input(message: Optional[str] = None) -> AppError:
    return AppError(ErrorKind.BAD_USER_INPUT, message)


def bad_request(message: Optional[str] = None) -> AppError:
    return AppError(ErrorKind.BAD_REQUEST, message)


def not_found(message: Optional[str] = None) -> AppError:
    return AppError(ErrorKind.NOT_FOUND, message)


def unauthorized(message: Optional[str] = None) -> AppError:
    return AppError(ErrorKind.UN_AUTHORIZED, message)


def unauthenticated(message: Optional[str] = None) -> AppError:
    return AppError(ErrorKind.UN_AUTHENTICATED, message)


def require_input(*values) -> None:
    """BAD_USER_INPUT unless every value is present and non-empty."""
    if not all(values):
        raise bad_input()


async def _app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=HTTP_STATUS[exc.kind],
        content={"detail": exc.message, "code": exc.kind.value},
    )


async def _external_service_error_handler(request: Request, exc: ExternalServiceError):
    logger.error("External service failure | path=%s | %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc), "code": "EXTERNAL_SERVICE_ERROR"},
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_STATUS[ErrorKind.BAD_USER_INPUT],
        content={
            "detail": DEFAULT_MESSAGES[ErrorKind.BAD_USER_INPUT],
            "code": ErrorKind.BAD_USER_INPUT.value,
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(ExternalServiceError, _external_service_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
