from __future__ import annotations
import logging
from urllib.parse import quote_plus
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from app.core.exceptions import DatabaseException
from app.core.settings import settings

Base = declarative_base()

_engine = None
_SessionLocal = None

logger = logging.getLogger(__name__)

def _postgres_url() -> str:
    host = settings.db_host
    port = settings.db_port
    user = quote_plus(settings.db_user or "")
    password = quote_plus(settings.db_password or "")
    db = settings.db_name
    return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"

def _database_url() -> str:
    return settings.database_url or _postgres_url()

def _sqlite_lower(value):
    return value.lower() if isinstance(value, str) else value

def _register_sqlite_functions(dbapi_conn, connection_record):
    # SQLite 기본 lower()는 ASCII만 변환하므로 str.lower로 교체
    dbapi_conn.create_function("lower", 1, _sqlite_lower, deterministic=True)

def get_engine():
    global _engine
    if _engine is None:
        url = _database_url()
        if url.startswith("sqlite"):
            logger.info(f"Initializing SQLite engine url={url}")
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url.rstrip("/") == "sqlite:":
                # 메모리 DB는 커넥션마다 새로 생기므로 하나만 공유
                kwargs["poolclass"] = StaticPool
            _engine = create_engine(url, echo=settings.db_echo, future=True, **kwargs)
            event.listen(_engine, "connect", _register_sqlite_functions)
        else:
            logger.info(
                f"Initializing Postgres engine host={settings.db_host} port={settings.db_port} "
                f"user={settings.db_user} db={settings.db_name}"
            )
            _engine = create_engine(url, echo=settings.db_echo, pool_pre_ping=True, future=True)
    return _engine

def _get_sessionmaker():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autocommit=False, autoflush=False, future=True)
    return _SessionLocal

def get_db() -> Session:
    db = _get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # 모델 모듈을 import해야 메타데이터에 테이블이 등록됨
    from app.models import bookmark, folder, tag  # noqa: F401
    Base.metadata.create_all(bind=get_engine())

def commit_or_raise(db: Session) -> None:
    """커밋 실패 시 롤백하고 DatabaseException으로 감싸서 올림"""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Commit failed: {e}")
        raise DatabaseException("database commit failed") from e
