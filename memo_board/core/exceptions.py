"""
Errores de dominio y handlers globales para respuestas de error consistentes.

- `AuthError` y subclases: frontera de autenticación, responden `{"error": ...}`.
- `ValidationError` / `StorageError`: board local (no llegan a la API).
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class MemoBoardError(Exception):
    """Base de todos los errores propios."""


class ValidationError(MemoBoardError):
    """Campo requerido vacío o inválido; bloquea la acción sin crear la nota."""


class StorageError(MemoBoardError):
    """Fallo al leer/escribir el almacenamiento local del board."""


class AuthError(MemoBoardError):
    status_code = 400
    message = "Auth error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class DuplicateEmail(AuthError):
    status_code = 400
    message = "User already exists"


class NotFound(AuthError):
    status_code = 404
    message = "User not found"


class InvalidCredentials(AuthError):
    status_code = 401
    message = "Invalid credentials"


class InvalidToken(AuthError):
    status_code = 401
    message = "Invalid token"


class TooManyAttempts(AuthError):
    status_code = 429
    message = "Too many attempts, try again later"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("memo_board.errors")

    @app.exception_handler(AuthError)
    async def _auth_exc_handler(request: Request, exc: AuthError):
        log.info("auth error status=%s error=%s request_id=%s", exc.status_code, exc.message, _req_id(request))
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body: Dict[str, Any] = {"message": exc.detail or "HTTP error"}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body: Dict[str, Any] = {"message": "Validation error", "errors": exc.errors()}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=422, content=body)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        body: Dict[str, Any] = {"message": "Internal server error"}
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=500, content=body)
