"""
공통 pytest 픽스처.

테스트는 메모리 SQLite(StaticPool)에서 실행되며,
앱 모듈을 import하기 전에 DATABASE_URL을 지정해야 합니다.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta
from itertools import count

import pytest
from fastapi.testclient import TestClient

from app.db.postgres import Base, get_engine, get_db, init_db
from app.main import app
from app.schemas.bookmark import BookmarkOut
from app.schemas.tag import TagOut

BASE_TIME = datetime(2024, 6, 1, 12, 0, 0)

_ids = count(1000)


def make_candidate(
    id=None,
    title="제목",
    description=None,
    tags=(),
    created_at=None,
    folder_id=1,
):
    """DB 없이 쓰는 검색 후보(BookmarkOut) 생성 헬퍼"""
    created_at = created_at or BASE_TIME
    return BookmarkOut(
        id=id if id is not None else next(_ids),
        title=title,
        url="https://example.com/item",
        description=description,
        folder_id=folder_id,
        folder_name="기술",
        created_at=created_at,
        updated_at=created_at,
        tags=[
            TagOut(id=i + 1, name=name, created_at=BASE_TIME)
            for i, name in enumerate(tags)
        ],
    )


@pytest.fixture
def candidate_factory():
    return make_candidate


@pytest.fixture
def days_ago():
    def _days_ago(n):
        return BASE_TIME - timedelta(days=n)
    return _days_ago


@pytest.fixture
def schema():
    """매 테스트마다 비어 있는 스키마"""
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(schema):
    gen = get_db()
    session = next(gen)
    try:
        yield session
    finally:
        gen.close()


@pytest.fixture
def client(schema):
    with TestClient(app) as c:
        yield c
