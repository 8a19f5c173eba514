"""
점수 기반 정렬과 수동 페이지네이션.

저장소의 정렬/페이징에 의존하지 않고, 메모리에서 점수를 매긴 결과를
정렬한 뒤 요청한 페이지 구간만 잘라냅니다.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, TypeVar

from app.core.exceptions import ValidationException
from app.schemas.bookmark import BookmarkOut
from app.schemas.page import Page

T = TypeVar("T")


@dataclass(frozen=True)
class ScoredCandidate:
    """점수와 후보 북마크를 함께 들고 다니기 위한 내부 레코드"""
    candidate: BookmarkOut
    score: int


def rank(scored: Iterable[ScoredCandidate], tiebreak_by_id: bool = False) -> List[ScoredCandidate]:
    """
    점수 내림차순, 같은 점수면 생성일 내림차순(최신순)으로 정렬.

    list.sort는 안정 정렬이므로 점수와 생성일이 모두 같으면 입력 순서를 유지합니다.
    tiebreak_by_id=True면 id 내림차순을 3차 키로 써서 입력 순서와 무관하게 고정합니다.

    Args:
        scored: 점수가 매겨진 후보들
        tiebreak_by_id: id를 3차 정렬 키로 사용할지 여부

    Returns:
        정렬된 새 리스트 (입력은 변경하지 않음)
    """
    if tiebreak_by_id:
        key = lambda s: (s.score, s.candidate.created_at, s.candidate.id)
    else:
        key = lambda s: (s.score, s.candidate.created_at)
    return sorted(scored, key=key, reverse=True)


def paginate(items: Sequence[T], page_index: int, page_size: int) -> Page[T]:
    """
    정렬된 전체 결과에서 한 페이지를 잘라냅니다.

    범위를 벗어난 페이지는 에러 대신 빈 페이지를 반환하고,
    total_elements는 항상 잘라내기 전 전체 개수입니다.

    Raises:
        ValidationException: page_index < 0 또는 page_size <= 0
    """
    if page_index < 0:
        raise ValidationException(f"page index must not be negative: {page_index}")
    if page_size <= 0:
        raise ValidationException(f"page size must be positive: {page_size}")

    total = len(items)
    offset = page_index * page_size
    if offset > total:
        content = []
    else:
        content = list(items[offset:min(offset + page_size, total)])

    return Page(
        items=content,
        page_index=page_index,
        page_size=page_size,
        total_elements=total,
    )
