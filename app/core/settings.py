from __future__ import annotations
from pathlib import Path
import os
from typing import Sequence
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

def _base_dir() -> Path:
    return Path(__file__).resolve().parents[2]

def _env_files() -> Sequence[Path]:
    base = _base_dir()
    app_env = os.getenv("APP_ENV", "local")
    candidates = [
        base / ".env",
        base / f".env.{app_env}",
        base / ".env.local",
        base / f".env.{app_env}.local",
        base / "env" / app_env / ".env",
    ]
    seen = []
    for p in candidates:
        if p.is_file() and p not in seen:
            seen.append(p)
    return seen

class Settings(BaseSettings):
    app_env: str = Field(default="local", validation_alias="APP_ENV")

    # PostgreSQL: POSTGRES_*
    db_host: str = Field(default="localhost", validation_alias="POSTGRES_HOST")
    db_port: int = Field(default=5432, validation_alias="POSTGRES_PORT")
    db_user: str = Field(default="postgres", validation_alias="POSTGRES_USER")
    db_password: str = Field(default="", validation_alias="POSTGRES_PASSWORD")
    db_name: str = Field(default="bookmarks", validation_alias="POSTGRES_DB")

    # 지정하면 POSTGRES_* 대신 이 URL을 그대로 사용 (로컬/테스트용 sqlite 등)
    database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
    db_echo: bool = Field(default=False, validation_alias="DB_ECHO")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:3001",
        validation_alias="CORS_ORIGINS",
    )

    # Search
    search_default_page_size: int = Field(default=10, validation_alias="SEARCH_DEFAULT_PAGE_SIZE")
    search_max_page_size: int = Field(default=100, validation_alias="SEARCH_MAX_PAGE_SIZE")
    search_tiebreak_by_id: bool = Field(default=True, validation_alias="SEARCH_TIEBREAK_BY_ID")

    # Dev seed 데이터를 앱 시작 시 자동으로 넣을지 여부
    seed_on_startup: bool = Field(default=False, validation_alias="SEED_ON_STARTUP")

    model_config = SettingsConfigDict(
        env_file=_env_files(),
        env_file_encoding="utf-8",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

settings = Settings()
