import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine

from biblioteca import main
from biblioteca.config import settings
from biblioteca.deps import get_session
from biblioteca.main import create_app, lifespan

pytestmark = pytest.mark.asyncio

UNREACHABLE_URL = "postgresql+asyncpg://biblioteca:x@127.0.0.1:1/biblioteca"

ALUNO = {
    "nome": "Ana",
    "sobrenome": "Silva",
    "dataNascimento": "2000-01-01",
    "endereco": "Rua A",
    "email": "a@x.com",
    "celular": "111",
}

async def test_lifespan_fails_when_database_is_unreachable(monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", UNREACHABLE_URL)
    app = create_app()
    with pytest.raises(RuntimeError):
        async with lifespan(app):
            pass
    assert getattr(app.state, "engine", None) is None

async def test_lifespan_serves_requests_and_disposes_pool(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'biblioteca.db'}")
    monkeypatch.setattr(settings, "DB_CREATE_SCHEMA", True)
    app = create_app()
    async with lifespan(app):
        engine = app.state.engine
        pool = engine.pool
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.post("/novo/aluno", json=ALUNO)
            assert r.status_code == 200
            alunos = (await client.get("/listar/aluno")).json()
            assert [a["nome"] for a in alunos] == ["Ana"]
    assert engine.pool is not pool

async def test_lifespan_configures_logging(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(main, "configure_logging", calls.append)
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'biblioteca.db'}")
    app = create_app()
    assert calls == []
    async with lifespan(app):
        assert calls == [settings.LOG_LEVEL]

async def test_injected_engine_is_not_disposed(async_engine):
    app = create_app(engine=async_engine)
    pool = async_engine.pool
    async with lifespan(app):
        pass
    assert async_engine.pool is pool

async def test_missing_tables_is_500_db_error():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    app = create_app(engine=engine)
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/listar/aluno")
        assert r.status_code == 500
        assert r.json()["codigo"] == "DB_ERROR"
    finally:
        await engine.dispose()

async def test_unexpected_error_is_500_internal_error(async_engine):
    async def broken_session():
        raise RuntimeError("sessão indisponível")

    app = create_app(engine=async_engine)
    app.dependency_overrides[get_session] = broken_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        r = await client.get("/listar/aluno")
    assert r.status_code == 500
    assert r.json()["codigo"] == "INTERNAL_ERROR"
