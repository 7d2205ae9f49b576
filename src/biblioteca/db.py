import logging
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

class Base(DeclarativeBase):
    pass

def build_url(cfg) -> URL | str:
    """DATABASE_URL tem prioridade; sem ela a URL é montada a partir das variáveis DB_*."""
    if cfg.DATABASE_URL:
        return cfg.DATABASE_URL
    return URL.create(
        "postgresql+asyncpg",
        username=cfg.DB_USER,
        password=cfg.DB_PASSWORD,
        host=cfg.DB_HOST,
        port=cfg.DB_PORT,
        database=cfg.DB_NAME,
    )

def create_pool(url: URL | str, *, max_connections: int = 10, idle_timeout_ms: int = 10000) -> AsyncEngine:
    """Cria o engine assíncrono que mantém o pool de conexões.

    O pool tem no máximo ``max_connections`` conexões (sem overflow).
    O SQLAlchemy não descarta conexões ociosas por tempo: ``idle_timeout_ms``
    vira ``pool_recycle``, ou seja, a idade máxima de uma conexão (em segundos,
    no mínimo 1) antes de ser reaberta no próximo checkout. O ``pool_pre_ping``
    cobre conexões derrubadas pelo servidor nesse intervalo. URLs SQLite usam
    pools que não aceitam esses parâmetros de tamanho.
    """
    url = make_url(url)
    options = {"echo": False, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=max_connections,
            max_overflow=0,
            pool_recycle=max(1, idle_timeout_ms // 1000),
        )
    return create_async_engine(url, **options)

def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def check_connection(engine: AsyncEngine) -> bool:
    """Abre uma única conexão para testar o banco. Nunca levanta exceção."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Erro ao conectar ao banco de dados: {e}")
        return False
    logger.info("Banco de dados conectado!")
    return True

async def init_db(engine: AsyncEngine):
    from biblioteca import models
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
