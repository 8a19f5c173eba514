"""
Dev 환경용 폴더/태그/북마크 Mock 데이터 생성 스크립트.

데모 폴더 계층과 태그가 달린 북마크 3개를 만들고,
필요하면 Faker로 대량 북마크를 추가합니다.
"""
from __future__ import annotations
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from faker import Faker
from sqlalchemy.orm import Session

from app.models.bookmark import Bookmark
from app.models.folder import Folder
from app.utils.tag_resolver import resolve_tags

logger = logging.getLogger(__name__)

TAG_SEED: List[str] = ["Java", "Spring", "JPA", "프로젝트A", "여행", "기획"]

# (이름, 부모 이름) 순서대로 생성하므로 부모가 먼저 나와야 함
FOLDER_SEED: List[Dict] = [
    {"name": "업무", "parent": None},
    {"name": "개인", "parent": None},
    {"name": "프로젝트A", "parent": "업무"},
    {"name": "프로젝트B", "parent": "업무"},
    {"name": "기획", "parent": "프로젝트A"},
    {"name": "개발", "parent": "프로젝트A"},
]

BOOKMARK_SEED: List[Dict] = [
    {
        "title": "초기 기획서",
        "url": "https://example.com/projectA/plan",
        "description": "프로젝트A 초기 기획 내용",
        "folder": "기획",
        "tags": ["기획", "프로젝트A"],
    },
    {
        "title": "Spring Data JPA 공식 문서",
        "url": "https://spring.io/projects/spring-data-jpa",
        "description": "JPA 관련 핵심 기술 자료",
        "folder": "개발",
        "tags": ["Spring", "JPA", "Java"],
    },
    {
        "title": "여름 휴가 계획",
        "url": "https://example.com/vacation",
        "description": "숙소, 교통편 예약하기",
        "folder": "개인",
        "tags": ["여행"],
    },
]


def seed_demo_data(db: Session) -> bool:
    """
    데모 폴더 계층, 태그, 북마크를 생성합니다.

    폴더가 하나라도 있으면 아무것도 하지 않습니다.

    Returns:
        시딩을 실행했으면 True
    """
    logger.info("Checking for initial data...")
    if db.query(Folder).count() > 0:
        logger.info("Data already exists. Skipping initialization.")
        return False

    logger.info("Initializing demo data...")
    resolve_tags(db, TAG_SEED)

    folders_by_name: Dict[str, Folder] = {}
    for item in FOLDER_SEED:
        parent: Optional[Folder] = folders_by_name.get(item["parent"]) if item["parent"] else None
        folder = Folder(name=item["name"], parent=parent)
        db.add(folder)
        db.flush()  # id 생성
        folders_by_name[item["name"]] = folder

    for item in BOOKMARK_SEED:
        bookmark = Bookmark(
            title=item["title"],
            url=item["url"],
            description=item["description"],
            folder=folders_by_name[item["folder"]],
        )
        bookmark.tags = resolve_tags(db, item["tags"])
        db.add(bookmark)

    db.commit()
    logger.info(
        f"Demo data initialization completed: {len(FOLDER_SEED)} folders, "
        f"{len(TAG_SEED)} tags, {len(BOOKMARK_SEED)} bookmarks"
    )
    return True


def seed_fake_bookmarks(db: Session, count: int, seed: Optional[int] = None) -> int:
    """
    Faker로 랜덤 북마크를 count개 생성합니다.

    - 기존 폴더 중 랜덤 배정 (폴더가 없으면 데모 데이터부터 생성)
    - 기존 태그 + 랜덤 단어 태그 0~3개
    - created_at은 최근 6개월 이내 랜덤

    Returns:
        생성된 북마크 개수
    """
    fake = Faker()
    rng = random.Random(seed)
    if seed is not None:
        fake.seed_instance(seed)

    folders = db.query(Folder).all()
    if not folders:
        logger.info("No folders found. Seeding demo data first.")
        seed_demo_data(db)
        folders = db.query(Folder).all()

    tag_pool = TAG_SEED + [fake.unique.word() for _ in range(10)]
    now = datetime.now(timezone.utc)

    for i in range(count):
        created_at = now - timedelta(days=rng.randint(0, 180), hours=rng.randint(0, 23))
        bookmark = Bookmark(
            title=fake.catch_phrase(),
            url=fake.url(),
            description=fake.sentence() if rng.random() > 0.3 else None,
            folder=rng.choice(folders),
            created_at=created_at,
            updated_at=created_at,
        )
        bookmark.tags = resolve_tags(db, rng.sample(tag_pool, rng.randint(0, 3)))
        db.add(bookmark)

        if (i + 1) % 100 == 0:
            db.flush()
            logger.info(f"Generated {i + 1}/{count} bookmarks...")

    db.commit()
    logger.info(f"Inserted {count} fake bookmarks")
    return count
