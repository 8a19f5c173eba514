"""
폴더(Folder) 관련 Pydantic 스키마.
"""

from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.schemas.bookmark import BookmarkOut


class FolderCreate(BaseModel):
    """
    폴더 생성 요청 모델.
    """
    name: str = Field(..., min_length=1, max_length=100, description="폴더 이름")
    parent_id: Optional[int] = Field(None, description="부모 폴더 ID (없으면 최상위)")

    @field_validator("name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("폴더 이름은 비어 있을 수 없습니다.")
        return v


class FolderUpdate(BaseModel):
    """
    폴더 수정 요청 모델.

    parent_id를 명시적으로 null로 보내면 최상위로 이동하고,
    필드를 아예 보내지 않으면 부모를 변경하지 않습니다.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    parent_id: Optional[int] = None


class FolderOut(BaseModel):
    """폴더 응답 모델"""
    id: int
    name: str
    parent_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class FolderTreeOut(BaseModel):
    """
    폴더 트리 노드.

    하위 폴더(children)와 이 폴더에 속한 북마크(bookmarks)를 재귀적으로 포함합니다.
    """
    id: int
    name: str
    parent_id: Optional[int] = None
    children: List[FolderTreeOut] = Field(default_factory=list)
    bookmarks: List[BookmarkOut] = Field(default_factory=list)


FolderTreeOut.model_rebuild()
