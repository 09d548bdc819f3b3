"""
Middlewares de la API de Memo Board.

- `RequestIdMiddleware`: propaga o genera `X-Request-Id` (lo usan los handlers de error).
- `LoggingMiddleware`: una línea por petición en `memo_board.request`.
- CORS para el frontend del board (`cors_origins` / `cors_allow_any`).
"""
import logging
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from memo_board.core.config import settings

REQUEST_ID_HEADER = "X-Request-Id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = rid
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.log = logging.getLogger("memo_board.request")

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        status = 0  # queda en 0 si la petición explota antes de responder
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            self.log.info(
                "%s %s status=%s latency_ms=%s request_id=%s",
                request.method,
                request.url.path,
                status,
                int((time.perf_counter() - start) * 1000),
                getattr(request.state, "request_id", None),
            )


def _cors_options() -> dict:
    if settings.cors_allow_any:
        # origen comodín: sin credentials
        return dict(allow_origin_regex=".*", allow_credentials=False)
    return dict(allow_origins=settings.cors_origins, allow_credentials=True)


def add_middlewares(app: FastAPI) -> None:
    app.add_middleware(CORSMiddleware, allow_methods=["*"], allow_headers=["*"], **_cors_options())
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(LoggingMiddleware)
