from types import SimpleNamespace

import pytest
from biblioteca.db import build_url, create_pool, check_connection

pytestmark = pytest.mark.asyncio

# porta 1 em loopback recusa a conexão na hora
UNREACHABLE_URL = "postgresql+asyncpg://biblioteca:x@127.0.0.1:1/biblioteca"

def _cfg(**overrides):
    base = dict(
        DATABASE_URL=None,
        DB_USER="biblioteca",
        DB_PASSWORD="p@ss:word",
        DB_HOST="db.local",
        DB_PORT=5433,
        DB_NAME="biblioteca",
    )
    return SimpleNamespace(**{**base, **overrides})

async def test_build_url_from_db_vars():
    url = build_url(_cfg())
    assert url.drivername == "postgresql+asyncpg"
    assert url.username == "biblioteca"
    assert url.password == "p@ss:word"
    assert url.host == "db.local"
    assert url.port == 5433
    assert url.database == "biblioteca"

async def test_build_url_prefers_database_url():
    assert build_url(_cfg(DATABASE_URL="sqlite+aiosqlite:///x.db")) == "sqlite+aiosqlite:///x.db"

async def test_create_pool_applies_limits():
    engine = create_pool("postgresql+asyncpg://u:p@localhost/db", max_connections=3, idle_timeout_ms=5000)
    try:
        assert engine.pool.size() == 3
    finally:
        await engine.dispose()

async def test_check_connection_ok():
    engine = create_pool("sqlite+aiosqlite:///:memory:")
    try:
        assert await check_connection(engine) is True
    finally:
        await engine.dispose()

async def test_check_connection_failure_returns_false():
    engine = create_pool(UNREACHABLE_URL)
    try:
        assert await check_connection(engine) is False
    finally:
        await engine.dispose()
