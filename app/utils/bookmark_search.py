"""
북마크 관련도 검색 메인 모듈.

DB에서 OR 조건으로 넓게 조회한 뒤, 애플리케이션 레벨에서
점수를 매겨 정렬하고 페이지를 잘라 반환합니다.
"""
from __future__ import annotations
from typing import Collection, Optional
import logging

from app.core.exceptions import ValidationException
from app.core.settings import settings
from app.schemas.bookmark import BookmarkOut
from app.schemas.page import Page
from app.utils.candidate_fetcher import CandidateFetcher
from app.utils.ranking import ScoredCandidate, paginate, rank
from app.utils.relevance_scorer import RelevanceScorer

logger = logging.getLogger(__name__)

NO_CRITERIA_MESSAGE = "at least one search criterion (keyword or tags) is required"


class BookmarkSearchEngine:
    """앱 레벨 정렬 기반 북마크 검색"""

    def __init__(
        self,
        fetcher: CandidateFetcher,
        scorer: Optional[RelevanceScorer] = None,
        tiebreak_by_id: Optional[bool] = None,
    ):
        self.fetcher = fetcher
        self.scorer = scorer or RelevanceScorer()
        self.tiebreak_by_id = (
            settings.search_tiebreak_by_id if tiebreak_by_id is None else tiebreak_by_id
        )

    def search(
        self,
        keyword: Optional[str] = None,
        tag_names: Optional[Collection[str]] = None,
        page_index: int = 0,
        page_size: int = 10,
    ) -> Page[BookmarkOut]:
        """
        키워드/태그로 북마크를 검색하고 관련도 순으로 한 페이지를 반환.

        tag_names는 받은 그대로 조회와 점수 계산에 사용합니다.
        (전체 태그 보너스는 요청 태그 개수 기준)

        Args:
            keyword: 제목/설명 검색어 (선택)
            tag_names: 태그 이름 목록 (선택)
            page_index: 페이지 번호 (0부터)
            page_size: 페이지 크기

        Returns:
            관련도 내림차순, 같은 점수면 최신순으로 정렬된 페이지

        Raises:
            ValidationException: 키워드가 비어 있고 태그 목록도 없거나 빈 경우 (조회 전에 검사)
        """
        keyword_exists = self.scorer.has_keyword(keyword)
        tags_exist = self.scorer.has_tags(tag_names)

        if not keyword_exists and not tags_exist:
            logger.warning("Search attempted without any criteria.")
            raise ValidationException(NO_CRITERIA_MESSAGE)

        logger.info(f"Searching bookmarks keyword={keyword!r} tags={tag_names} page={page_index} size={page_size}")

        keyword = keyword if keyword_exists else None
        tag_names = tag_names if tags_exist else None

        candidates = self.fetcher.fetch_candidates(keyword, tag_names)

        scored = [
            ScoredCandidate(candidate=c, score=self.scorer.score(c, keyword, tag_names))
            for c in candidates
        ]
        ranked = rank(scored, tiebreak_by_id=self.tiebreak_by_id)

        page = paginate([s.candidate for s in ranked], page_index, page_size)
        logger.debug(
            f"Search done: candidates={len(candidates)} returned={len(page.items)} "
            f"top_score={ranked[0].score if ranked else None}"
        )
        return page
