from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import logging

from app.config.settings import settings
from app.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

_DEFAULT_ERROR_CODES = {
    400: "validation_error",
    401: "unauthenticated",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
}


def _error_body(message: str, error_code: str, details=None) -> dict:
    return ErrorResponse(message=message, error_code=error_code, details=details).model_dump(mode="json")


def _validation_message(error: dict) -> str:
    """Mensaje legible a partir del primer error de pydantic"""
    fields = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = fields[-1] if fields else "body"

    if error.get("type") == "missing":
        return f'El campo "{field}" es obligatorio.'

    msg = str(error.get("msg", "valor inválido"))
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f'El campo "{field}" no es válido: {msg}'


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response


def setup_exception_handlers(app: FastAPI):
    """Respuestas de error con formato ErrorResponse"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        error_code = getattr(exc, "error_code", None) or _DEFAULT_ERROR_CODES.get(exc.status_code, "error")
        if exc.status_code >= 500:
            logger.error(f"Error {exc.status_code} en {request.url.path}: {exc.detail}")
            message = "Error del servidor"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(message, error_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = _validation_message(errors[0]) if errors else "Solicitud inválida."
        logger.warning(f"Solicitud rechazada {request.method} {request.url.path}: {message}")
        return JSONResponse(
            status_code=400,
            content=_error_body(message, "validation_error"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Error inesperado en {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=_error_body("Error del servidor", "server_error"),
        )
