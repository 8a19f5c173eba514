"""
북마크(Bookmark) 관련 Pydantic 스키마.

PostgreSQL bookmarks 테이블의 행을 표현하고,
API 요청/응답 모델을 정의합니다.
검색 엔진은 BookmarkOut을 후보(candidate) 레코드로 사용합니다.
"""

from __future__ import annotations
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from app.schemas.tag import TagOut

if TYPE_CHECKING:
    from app.models.bookmark import Bookmark


def _check_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    parsed = urlparse(v.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("유효한 URL 형식이 아닙니다.")
    return v.strip()


class BookmarkCreate(BaseModel):
    """
    북마크 생성 요청 모델.
    """
    title: str = Field(..., min_length=1, max_length=255, description="북마크 제목")
    url: str = Field(..., max_length=2083, description="북마크 URL (http/https)")
    description: Optional[str] = Field(None, max_length=10000, description="설명")
    folder_id: int = Field(..., description="소속 폴더 ID")
    tag_names: List[str] = Field(default_factory=list, description="태그 이름 목록 (없으면 생성)")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("북마크 제목은 비어 있을 수 없습니다.")
        return v

    @field_validator("url")
    @classmethod
    def _valid_url(cls, v: str) -> str:
        return _check_url(v)


class BookmarkUpdate(BaseModel):
    """
    북마크 수정 요청 모델.

    모든 필드는 선택입니다. 제목/URL이 비어 있으면 무시하고,
    description은 빈 문자열로도 변경할 수 있습니다.
    tag_names가 주어지면 태그 집합 전체를 교체합니다.
    """
    title: Optional[str] = Field(None, max_length=255)
    url: Optional[str] = Field(None, max_length=2083)
    description: Optional[str] = Field(None, max_length=10000)
    folder_id: Optional[int] = None
    tag_names: Optional[List[str]] = None

    @field_validator("url")
    @classmethod
    def _valid_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return _check_url(v)


class BookmarkOut(BaseModel):
    """
    북마크 응답 모델.
    """
    id: int
    title: str
    url: str
    description: Optional[str] = None
    folder_id: int
    folder_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    tags: List[TagOut] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, bookmark: Bookmark) -> "BookmarkOut":
        folder = bookmark.folder
        return cls(
            id=bookmark.id,
            title=bookmark.title,
            url=bookmark.url,
            description=bookmark.description,
            folder_id=bookmark.folder_id,
            folder_name=folder.name if folder is not None else None,
            created_at=bookmark.created_at,
            updated_at=bookmark.updated_at,
            tags=[TagOut.model_validate(t) for t in bookmark.tags],
        )

    @property
    def tag_names(self) -> List[str]:
        return [t.name for t in self.tags]
