import logging
from datetime import datetime

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

'''
Вспомогательная функция _error_response()

Принимает параметры status_code, message, code, request. Возвращает стандартный FastAPI-ответ с JSON-телом.

Собираем единый формат ошибки: {message, error?, code, path, timestamp}.
'''
def _error_response(
    *,
    status_code: int,
    message: str,
    code: str,
    request: Request,
    error: str | None = None,
) -> JSONResponse:
    content = {
        "message": message,
        "code": code,
        "path": request.url.path,
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)

# Базовый класс AppError
class AppError(Exception):
    status_code = 400
    code = "app_error"
    detail = "Application error"

    def __init__(self, detail: str | None = None, code: str | None = None):
        if detail is not None:
            self.detail = detail
        if code is not None:
            self.code = code
        super().__init__(self.detail)


# ================
# Кастомные ошибки
# ================

class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    detail = "Invalid data"


class ConflictError(AppError):
    status_code = 400
    code = "conflict"
    detail = "Resource already exists"


class UnauthorizedError(AppError):
    status_code = 401
    code = "unauthorized"
    detail = "Not authenticated"


class InvalidToken(UnauthorizedError):
    code = "invalid_token"
    detail = "Invalid or expired token"


class PermissionDeniedError(AppError):
    status_code = 403
    code = "permission_denied"
    detail = "You are not allowed to perform this action"


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    detail = "Resource not found"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_response(
        status_code=exc.status_code,
        message=exc.detail,
        code=exc.code,
        request=request,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _error_response(
        status_code=exc.status_code,
        message=message,
        code="http_error",
        request=request,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    # Перечисляем поля с ошибками, например "body.title: Field required"
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    return _error_response(
        status_code=400,
        message="Validation error",
        code="validation_error",
        request=request,
        error=problems,
    )


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    logger.warning("Rate limit exceeded on %s: %s", request.url.path, exc.detail)
    return _error_response(
        status_code=429,
        message=f"Too many requests: {exc.detail}",
        code="rate_limit_exceeded",
        request=request,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status_code=500,
        message="Server error",
        code="internal_server_error",
        request=request,
        error=str(exc),
    )
