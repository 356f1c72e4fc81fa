# admin_console/core/errors.py
"""
Error taxonomy and the handlers that render it.

Every error leaves the API in the same envelope:
    {"success": false, "error": "<message>", "code": "<stable code>", "details": [...]}

Authentication failures (401) and authorization failures (403) are separate
branches of the hierarchy so a client can tell "log in again" from "access denied".
"""
import logging
from typing import List, Optional

from bson.errors import InvalidId
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class APIException(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "error"
    detail = "Request failed."

    def __init__(self, detail: Optional[str] = None, details: Optional[List[str]] = None):
        super().__init__(status_code=self.status_code, detail=detail or self.detail)
        self.details = details


class ValidationFailed(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    detail = "Validation failed"


class InvalidIdentifier(ValidationFailed):
    code = "invalid_id"
    detail = "Invalid ID format."


# --- who are you -----------------------------------------------------------
class AuthenticationError(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "authentication_failed"
    detail = "Authentication failed."


class MissingToken(AuthenticationError):
    code = "token_missing"
    detail = "Access denied. No token provided."


class TokenExpired(AuthenticationError):
    code = "token_expired"
    detail = "Token expired. Please login again."


class InvalidToken(AuthenticationError):
    code = "token_invalid"
    detail = "Invalid token."


class WrongSubjectType(AuthenticationError):
    code = "token_wrong_subject"
    detail = "Invalid token type for this route."


class InvalidCredentials(AuthenticationError):
    code = "invalid_credentials"
    detail = "Invalid email or password."


class AccountInactive(AuthenticationError):
    code = "account_inactive"
    detail = "Account is deactivated."


# --- what can you do -------------------------------------------------------
class AuthorizationError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    detail = "Access denied."


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    detail = "Resource not found."


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    detail = "Resource already exists."


class UnexpectedError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal_error"
    detail = "Something went wrong. Please try again."


def error_body(message: str, code: str, details: Optional[List[str]] = None) -> dict:
    body = {"success": False, "error": message, "code": code}
    if details:
        body["details"] = details
    return body


def _format_validation_errors(exc: RequestValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg", "invalid"))
    return messages


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail, exc.code, exc.details),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", ValidationFailed.code, _format_validation_errors(exc)),
    )


async def invalid_id_handler(request: Request, exc: InvalidId) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(InvalidIdentifier.detail, InvalidIdentifier.code),
    )


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    logger.warning("Duplicate key on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body("Duplicate entry detected.", Conflict.code),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # framework-raised errors such as 404 on unknown routes or 405
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), "http_error"),
        headers=getattr(exc, "headers", None),
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(UnexpectedError.detail, UnexpectedError.code),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(InvalidId, invalid_id_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
