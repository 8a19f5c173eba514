from fastapi import APIRouter, Depends, Response, status
from typing import List
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictException, ResourceNotFoundException
from app.db.postgres import get_db, commit_or_raise
from app.models.tag import Tag
from app.schemas.tag import TagCreate, TagOut

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])
logger = logging.getLogger(__name__)


def _get_tag_or_404(db: Session, tag_id: int) -> Tag:
    tag = db.get(Tag, tag_id)
    if tag is None:
        raise ResourceNotFoundException(f"tag not found: id={tag_id}")
    return tag


def _find_by_name(db: Session, name: str) -> Tag | None:
    # 검색과 같은 기준으로 대소문자 무시
    return db.query(Tag).filter(func.lower(Tag.name) == name.lower()).first()


@router.post("", response_model=TagOut, status_code=status.HTTP_201_CREATED)
def create_tag(payload: TagCreate, db: Session = Depends(get_db)):
    if _find_by_name(db, payload.name):
        raise ConflictException(f"tag already exists: {payload.name}")

    tag = Tag(name=payload.name)
    db.add(tag)
    commit_or_raise(db)
    db.refresh(tag)
    logger.info(f"Tag created id={tag.id} name={tag.name!r}")
    return tag


@router.get("", response_model=List[TagOut])
def list_tags(db: Session = Depends(get_db)):
    return db.query(Tag).order_by(Tag.name.asc()).all()


@router.get("/{tag_id}", response_model=TagOut)
def get_tag(tag_id: int, db: Session = Depends(get_db)):
    return _get_tag_or_404(db, tag_id)


@router.put("/{tag_id}", response_model=TagOut)
def rename_tag(tag_id: int, payload: TagCreate, db: Session = Depends(get_db)):
    tag = _get_tag_or_404(db, tag_id)
    existing = _find_by_name(db, payload.name)
    if existing is not None and existing.id != tag.id:
        raise ConflictException(f"tag already exists: {payload.name}")

    tag.name = payload.name
    commit_or_raise(db)
    db.refresh(tag)
    return tag


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(tag_id: int, db: Session = Depends(get_db)):
    tag = _get_tag_or_404(db, tag_id)
    # 연결 테이블 행은 relationship(secondary)이 함께 정리
    db.delete(tag)
    commit_or_raise(db)
    logger.info(f"Tag deleted id={tag_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
