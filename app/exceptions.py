"""애플리케이션 예외와 전역 예외 핸들러를 정의하는 모듈입니다.

리소스 API(식당, 제보)의 오류는 `{"error": {"message": ...}}` 형태로,
인증 API(`/api/auth`)의 오류는 `{"success": false, "message": ...}` 형태로 응답합니다.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Config, logger

AUTH_PATH_PREFIX = "/api/auth"


class AppException(HTTPException):
    """도메인 오류의 기본 클래스"""

    status_code_default = Config.HttpStatus.INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(
            status_code=status_code or self.status_code_default, detail=detail
        )


class ValidationError(AppException):
    """필수 값 누락 등 요청이 올바르지 않을 때 (400)"""

    status_code_default = Config.HttpStatus.BAD_REQUEST


class AuthenticationError(AppException):
    """인증에 실패했을 때 (401)"""

    status_code_default = Config.HttpStatus.UNAUTHORIZED


class NotFoundError(AppException):
    """요청한 리소스가 없을 때 (404)"""

    status_code_default = Config.HttpStatus.NOT_FOUND


class ConflictError(AppException):
    """이미 존재하는 리소스를 만들려고 할 때 (409)"""

    status_code_default = Config.HttpStatus.CONFLICT


def error_body(request: Request, message: str) -> dict:
    """요청 경로에 맞는 오류 응답 바디를 만듭니다.

    Args:
        request (Request): 요청 객체.
        message (str): 오류 메시지.

    Returns:
        dict: 인증 API는 `{success, message}`, 그 외는 `{error: {message}}`.
    """
    if request.url.path.startswith(AUTH_PATH_PREFIX):
        return {"success": False, "message": message}
    return {"error": {"message": message}}


def format_validation_errors(errors) -> str:
    """RequestValidationError의 첫 번째 오류를 한 줄 메시지로 변환합니다."""
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(
        str(part)
        for part in first.get("loc", ())
        if part not in ("body", "query", "path")
    )
    message = first.get("msg", "Invalid value")
    return f"'{field}': {message}" if field else message


async def app_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        "%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = format_validation_errors(exc.errors())
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=Config.HttpStatus.BAD_REQUEST,
        content=error_body(request, message),
    )


async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=Config.HttpStatus.INTERNAL_SERVER_ERROR,
        content=error_body(request, "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """앱에 예외 핸들러를 등록합니다."""
    app.add_exception_handler(StarletteHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
