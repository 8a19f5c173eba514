from __future__ import annotations
from datetime import datetime, timezone
from typing import List

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.postgres import Base


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # 태그는 공유 자원이라 북마크 삭제 시 함께 지우지 않음
    bookmarks: Mapped[List["Bookmark"]] = relationship(
        "Bookmark",
        secondary="bookmark_tags",
        back_populates="tags",
    )
