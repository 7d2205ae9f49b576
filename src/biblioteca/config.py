import os
from dotenv import load_dotenv

load_dotenv()

def _as_bool(v: str | None, default: bool = False) -> bool:
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}

class Settings:
    # App
    APP_NAME: str = os.getenv("APP_NAME", "biblioteca-api")
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3333"))

    # DB
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASSWORD: str | None = os.getenv("DB_PASSWORD")
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str | None = os.getenv("DB_NAME")

    # Pool
    DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "10"))
    DB_IDLE_TIMEOUT_MS: int = int(os.getenv("DB_IDLE_TIMEOUT_MS", "10000"))

    # Cria as tabelas ausentes na inicialização
    DB_CREATE_SCHEMA: bool = _as_bool(os.getenv("DB_CREATE_SCHEMA"), True)

settings = Settings()
