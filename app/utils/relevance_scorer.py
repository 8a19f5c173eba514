"""
북마크 검색의 관련도 점수 계산 모듈.

검색어(keyword)와 태그 이름 목록을 기준으로 후보 북마크에 정수 점수를 매깁니다:
- Keyword Score: 제목 포함 20점, 아니면 설명 포함 10점 (대소문자 구분)
- Tag Score: 일치 태그당 5점 (대소문자 무시)
- Complete Tag Bonus: 요청한 태그를 모두 가지면 100점
- Cross Bonus: 키워드와 태그가 함께 일치하면 30점
"""
from __future__ import annotations
from typing import Collection, Optional

from app.schemas.bookmark import BookmarkOut


class RelevanceScorer:
    """룰 베이스 관련도 점수 계산기"""

    TITLE_MATCH = 20
    DESCRIPTION_MATCH = 10
    TAG_MATCH = 5
    ALL_TAGS_BONUS = 100
    CROSS_BONUS = 30

    @staticmethod
    def has_keyword(keyword: Optional[str]) -> bool:
        return keyword is not None and bool(keyword.strip())

    @staticmethod
    def has_tags(tag_names: Optional[Collection[str]]) -> bool:
        return tag_names is not None and len(tag_names) > 0

    @staticmethod
    def calculate_keyword_score(keyword: Optional[str], candidate: BookmarkOut) -> int:
        """
        키워드 점수 계산.

        제목을 먼저 보고, 제목에 없을 때만 설명을 봅니다.

        Args:
            keyword: 검색어 (공백이면 점수 없음)
            candidate: 후보 북마크

        Returns:
            20, 10 또는 0
        """
        if not RelevanceScorer.has_keyword(keyword):
            return 0
        if keyword in candidate.title:
            return RelevanceScorer.TITLE_MATCH
        if candidate.description is not None and keyword in candidate.description:
            return RelevanceScorer.DESCRIPTION_MATCH
        return 0

    @staticmethod
    def count_tag_matches(tag_names: Optional[Collection[str]], candidate: BookmarkOut) -> int:
        """
        후보의 태그 중 요청 태그와 이름이 같은(대소문자 무시) 태그 개수.
        """
        if not RelevanceScorer.has_tags(tag_names):
            return 0
        wanted = {name.lower() for name in tag_names}
        return sum(1 for tag in candidate.tags if tag.name.lower() in wanted)

    @staticmethod
    def score(
        candidate: BookmarkOut,
        keyword: Optional[str] = None,
        tag_names: Optional[Collection[str]] = None,
    ) -> int:
        """
        후보 북마크의 최종 관련도 점수.

        Args:
            candidate: 후보 북마크
            keyword: 검색어 (선택)
            tag_names: 검색 태그 이름 집합 (선택)

        Returns:
            관련도 점수 (0 이상)
        """
        score = RelevanceScorer.calculate_keyword_score(keyword, candidate)
        keyword_matched = score > 0

        match_count = 0
        if RelevanceScorer.has_tags(tag_names):
            match_count = RelevanceScorer.count_tag_matches(tag_names, candidate)
            score += match_count * RelevanceScorer.TAG_MATCH
            # 요청 태그를 모두 가진 경우 (AND 조건 만족)
            if match_count == len(tag_names):
                score += RelevanceScorer.ALL_TAGS_BONUS

        if keyword_matched and match_count > 0:
            score += RelevanceScorer.CROSS_BONUS

        return score
