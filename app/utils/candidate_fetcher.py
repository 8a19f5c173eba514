"""
검색 후보 북마크 조회 모듈.

키워드 조건 OR 태그 조건으로 저장소에서 넓게 후보를 가져옵니다.
정렬과 점수는 여기서 다루지 않습니다.
"""
from __future__ import annotations
from typing import Collection, List, Optional, Protocol
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseException
from app.models.bookmark import Bookmark, bookmark_tags
from app.models.tag import Tag
from app.schemas.bookmark import BookmarkOut

logger = logging.getLogger(__name__)


class CandidateFetcher(Protocol):
    """검색 후보 조회기 프로토콜 (저장소 구현 교체용)"""

    def fetch_candidates(
        self,
        keyword: Optional[str],
        tag_names: Optional[Collection[str]],
    ) -> List[BookmarkOut]:
        """
        키워드 또는 태그 중 하나라도 일치하는 북마크를 중복 없이 반환.

        Args:
            keyword: 제목/설명에 포함될 검색어 (없으면 None)
            tag_names: 태그 이름 목록 (없으면 None)

        Returns:
            순서가 보장되지 않는 후보 목록
        """
        ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def matches_candidate(
    candidate: BookmarkOut,
    keyword: Optional[str],
    tag_names: Optional[Collection[str]],
) -> bool:
    """
    OR 조건 판정: 키워드가 제목/설명에 포함되거나, 요청 태그를 하나라도 가짐.
    """
    if keyword:
        if keyword in candidate.title:
            return True
        if candidate.description is not None and keyword in candidate.description:
            return True
    if tag_names:
        wanted = {name.lower() for name in tag_names}
        if any(tag.name.lower() in wanted for tag in candidate.tags):
            return True
    return False


class SqlCandidateFetcher:
    """SQLAlchemy 세션 기반 후보 조회기"""

    def __init__(self, db: Session):
        self.db = db

    def fetch_candidates(
        self,
        keyword: Optional[str],
        tag_names: Optional[Collection[str]],
    ) -> List[BookmarkOut]:
        conditions = []
        if keyword:
            pattern = f"%{_escape_like(keyword)}%"
            conditions.append(Bookmark.title.like(pattern, escape="\\"))
            conditions.append(Bookmark.description.like(pattern, escape="\\"))
        if tag_names:
            lowered = sorted({name.lower() for name in tag_names})
            tagged_ids = (
                select(bookmark_tags.c.bookmark_id)
                .join(Tag, Tag.id == bookmark_tags.c.tag_id)
                .where(func.lower(Tag.name).in_(lowered))
            )
            conditions.append(Bookmark.id.in_(tagged_ids))

        if not conditions:
            logger.debug("fetch_candidates called without criteria; returning no candidates")
            return []

        stmt = select(Bookmark).where(or_(*conditions))
        try:
            rows = self.db.execute(stmt).unique().scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Candidate query failed: {e}")
            raise DatabaseException("failed to fetch search candidates") from e

        candidates = [BookmarkOut.from_entity(b) for b in rows]

        # LIKE의 대소문자 처리는 DB마다 달라서 한 번 더 걸러냄
        filtered = [c for c in candidates if matches_candidate(c, keyword, tag_names)]
        logger.debug(f"Fetched {len(rows)} rows, {len(filtered)} candidates after filtering")
        return filtered
