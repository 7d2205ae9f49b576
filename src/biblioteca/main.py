import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncEngine

from biblioteca.config import settings
from biblioteca.db import build_url, create_pool, create_sessionmaker, check_connection, init_db
from biblioteca.exceptions import (
    BibliotecaError,
    biblioteca_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)
from biblioteca.api.router import router

logger = logging.getLogger(__name__)

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

def _bind_engine(app: FastAPI, engine: AsyncEngine) -> None:
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    # um engine injetado (testes) pertence a quem o criou
    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        engine = create_pool(
            build_url(settings),
            max_connections=settings.DB_POOL_MAX,
            idle_timeout_ms=settings.DB_IDLE_TIMEOUT_MS,
        )
        if not await check_connection(engine):
            await engine.dispose()
            raise RuntimeError("Não foi possível conectar ao banco de dados.")
        if settings.DB_CREATE_SCHEMA:
            await init_db(engine)
        _bind_engine(app, engine)
    logger.info(f"{settings.APP_NAME} iniciado em modo {settings.ENV}")
    try:
        yield
    finally:
        if owns_engine:
            await app.state.engine.dispose()
            logger.info("Pool de conexões encerrado")

def create_app(engine: AsyncEngine | None = None) -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    if engine is not None:
        _bind_engine(app, engine)
    app.add_exception_handler(BibliotecaError, biblioteca_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.include_router(router)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("biblioteca.main:app", host=settings.HOST, port=settings.PORT)
