"""
태그 이름 → Tag 엔티티 변환 유틸리티.

북마크 생성/수정 시 요청된 태그 이름으로 기존 태그를 찾고,
없으면 새로 만듭니다.
"""
from __future__ import annotations
from typing import Iterable, List
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.tag import Tag

logger = logging.getLogger(__name__)


def resolve_tags(db: Session, tag_names: Iterable[str]) -> List[Tag]:
    """
    태그 이름 목록을 Tag 엔티티 목록으로 변환 (없으면 생성, 세션에 add만 함).

    이름 비교는 대소문자를 무시하며, 같은 태그가 두 번 들어가지 않습니다.

    Args:
        db: SQLAlchemy 세션
        tag_names: 요청된 태그 이름들

    Returns:
        연결할 Tag 엔티티 리스트 (요청 순서 유지)
    """
    tags: List[Tag] = []
    seen = set()
    for raw in tag_names:
        name = (raw or "").strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())

        tag = db.query(Tag).filter(func.lower(Tag.name) == name.lower()).first()
        if tag is None:
            tag = Tag(name=name)
            db.add(tag)
            db.flush()
            logger.debug(f"Created tag '{name}' id={tag.id}")
        tags.append(tag)
    return tags
