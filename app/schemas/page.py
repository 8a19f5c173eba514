"""
페이지네이션 응답 모델.
"""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field, computed_field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """
    정렬된 전체 결과 중 한 페이지.

    items는 전체 결과에서 page_index * page_size 위치부터 시작하는
    연속 구간이며, total_elements는 잘라내기 전 전체 개수입니다.
    """
    items: List[T] = Field(default_factory=list, description="현재 페이지 항목")
    page_index: int = Field(..., ge=0, description="페이지 번호 (0부터)")
    page_size: int = Field(..., gt=0, description="페이지 크기")
    total_elements: int = Field(..., ge=0, description="전체 결과 개수")

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.page_size) if self.total_elements else 0

    @computed_field
    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.total_pages

    @computed_field
    @property
    def has_prev(self) -> bool:
        return self.page_index > 0
