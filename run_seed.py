"""
Dev 환경용 Mock 데이터 생성 CLI 스크립트.

폴더/태그/북마크 테이블에 데모 데이터를 삽입합니다.
- dev 환경에서만 실행됩니다.
- 데모 계층: 업무(프로젝트A(기획, 개발), 프로젝트B), 개인

사용 예시:
    python run_seed.py
    python run_seed.py --fake 500  # Faker 북마크 500개 추가
    python run_seed.py --force  # dev 환경 체크 무시
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
BACKEND_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(BACKEND_ROOT))

from app.core.settings import settings
from app.core.logging_config import setup_logging
from app.db.postgres import get_db, init_db
from app.seed.bookmarks_seed import seed_demo_data, seed_fake_bookmarks

setup_logging()
logger = logging.getLogger(__name__)


def check_environment(force: bool = False) -> None:
    """
    dev 환경인지 확인합니다.
    """
    app_env = settings.app_env.lower()

    if app_env != "dev" and not force:
        logger.error(
            f"Current environment is '{app_env}'. "
            "Mock data seeding is only allowed in 'dev' environment."
        )
        logger.info("If you want to run anyway, use --force flag.")
        sys.exit(1)

    if force and app_env != "dev":
        logger.warning(f"Force mode enabled. Seeding in '{app_env}' environment...")
    else:
        logger.info(f"Environment check passed: {app_env}")


def seed_all(fake_count: int = 0, seed: int | None = None) -> None:
    logger.info("=" * 60)
    logger.info("Bookmark Mock Data Seeding")
    logger.info("=" * 60)

    init_db()
    db = next(get_db())
    try:
        logger.info("[1/2] Seeding demo folders, tags and bookmarks...")
        seed_demo_data(db)

        if fake_count > 0:
            logger.info(f"[2/2] Seeding {fake_count} fake bookmarks...")
            seed_fake_bookmarks(db, fake_count, seed=seed)
        else:
            logger.info("[2/2] Skipping fake bookmarks (--fake not given)")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        db.rollback()
        raise
    finally:
        db.close()

    logger.info("Seeding completed!")


def main():
    parser = argparse.ArgumentParser(
        description="Dev 환경용 Mock 데이터 생성 CLI"
    )
    parser.add_argument(
        "--fake",
        type=int,
        default=0,
        metavar="N",
        help="Faker로 생성할 추가 북마크 개수 (기본값: 0)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="랜덤 시드 (재현 가능한 fake 데이터)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="dev 환경 체크 무시 (위험: 주의해서 사용)",
    )

    args = parser.parse_args()

    check_environment(force=args.force)
    seed_all(fake_count=args.fake, seed=args.seed)


if __name__ == "__main__":
    main()
