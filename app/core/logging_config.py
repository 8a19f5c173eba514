"""
애플리케이션 로깅 설정.

루트 로거에 콘솔 핸들러를 붙이고 LOG_LEVEL 설정을 적용합니다.
앱 시작 시 가장 먼저 한 번 호출합니다.
"""
from __future__ import annotations
import logging
import sys

from app.core.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | None = None) -> None:
    """
    루트 로거 설정.

    다시 호출하면 기존 핸들러를 교체합니다 (force=True).

    Args:
        level: 로그 레벨 (None이면 settings.log_level 사용)
    """
    level_name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # SQL 로그는 DB_ECHO로만 제어
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured with level={level_name}")
