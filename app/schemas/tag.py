"""
태그(Tag) 관련 Pydantic 스키마.
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class TagCreate(BaseModel):
    """
    태그 생성/이름 변경 요청 모델.
    """
    name: str = Field(..., min_length=1, max_length=50, description="태그 이름")

    @field_validator("name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("태그 이름은 비어 있을 수 없습니다.")
        return v.strip()


class TagOut(BaseModel):
    """태그 응답 모델"""
    id: int
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}
