"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from memo_board.core.config import settings
from memo_board.infrastructure.db.mongo import init_mongo, db_ready
from memo_board.infrastructure.db.bootstrap import ensure_collections
from memo_board.api.router import api_router
from memo_board.core.logging import setup_logging
from memo_board.core.middleware import add_middlewares
from memo_board.core.exceptions import register_exception_handlers

_log = logging.getLogger("memo_board.startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not db_ready():
        init_mongo()
    # Garantiza colección/índices mínimos si hay conexión
    try:
        if db_ready():
            ensure_collections()
        else:
            _log.warning("Mongo no listo; omitiendo ensure_collections()")
    except PyMongoError as e:
        # No impedir el arranque si fallan validadores/índices
        _log.warning("ensure_collections() falló: %s", e)
    yield


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    add_middlewares(app)
    register_exception_handlers(app)

    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    return app


app = create_app()
