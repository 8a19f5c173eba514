from fastapi import APIRouter, Depends, Query, Response, status
from typing import List, Optional
import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.api.deps import get_search_engine
from app.core.exceptions import ResourceNotFoundException
from app.core.settings import settings
from app.db.postgres import get_db, commit_or_raise
from app.models.bookmark import Bookmark
from app.models.folder import Folder
from app.schemas.bookmark import BookmarkCreate, BookmarkOut, BookmarkUpdate
from app.schemas.page import Page
from app.utils.bookmark_search import BookmarkSearchEngine
from app.utils.tag_resolver import resolve_tags

router = APIRouter(prefix="/api/v1", tags=["bookmarks"])
logger = logging.getLogger(__name__)


def _get_bookmark_or_404(db: Session, bookmark_id: int) -> Bookmark:
    bookmark = db.get(Bookmark, bookmark_id)
    if bookmark is None:
        raise ResourceNotFoundException(f"bookmark not found: id={bookmark_id}")
    return bookmark


def _ensure_folder(db: Session, folder_id: int) -> Folder:
    folder = db.get(Folder, folder_id)
    if folder is None:
        raise ResourceNotFoundException(f"folder not found: id={folder_id}")
    return folder


def _split_tags(raw: Optional[List[str]]) -> List[str]:
    """?tags=a&tags=b 와 ?tags=a,b 두 형태를 모두 허용 (앞뒤 공백 제거)"""
    if not raw:
        return []
    names: List[str] = []
    for value in raw:
        names.extend(part.strip() for part in value.split(",") if part.strip())
    return names


@router.post("/bookmarks", response_model=BookmarkOut, status_code=status.HTTP_201_CREATED)
def create_bookmark(payload: BookmarkCreate, db: Session = Depends(get_db)):
    logger.info(f"Creating bookmark title={payload.title!r} folder_id={payload.folder_id}")
    _ensure_folder(db, payload.folder_id)

    bookmark = Bookmark(
        title=payload.title,
        url=payload.url,
        description=payload.description,
        folder_id=payload.folder_id,
    )
    bookmark.tags = resolve_tags(db, payload.tag_names)
    db.add(bookmark)
    commit_or_raise(db)
    db.refresh(bookmark)

    logger.info(f"Bookmark created id={bookmark.id} tags={[t.name for t in bookmark.tags]}")
    return BookmarkOut.from_entity(bookmark)


@router.get("/bookmarks/search", response_model=Page[BookmarkOut])
def search_bookmarks(
    keyword: Optional[str] = Query(None, description="제목/설명 검색어"),
    tags: Optional[List[str]] = Query(None, description="태그 이름 (반복 또는 쉼표 구분)"),
    page: int = Query(0, ge=0, description="페이지 번호 (0부터)"),
    size: Optional[int] = Query(None, gt=0, le=settings.search_max_page_size, description="페이지 크기"),
    engine: BookmarkSearchEngine = Depends(get_search_engine),
):
    page_size = size or settings.search_default_page_size
    return engine.search(
        keyword=keyword,
        tag_names=_split_tags(tags),
        page_index=page,
        page_size=page_size,
    )


@router.get("/bookmarks/{bookmark_id}", response_model=BookmarkOut)
def get_bookmark(bookmark_id: int, db: Session = Depends(get_db)):
    return BookmarkOut.from_entity(_get_bookmark_or_404(db, bookmark_id))


@router.get("/folders/{folder_id}/bookmarks", response_model=Page[BookmarkOut])
def list_folder_bookmarks(
    folder_id: int,
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, gt=0, le=settings.search_max_page_size),
    db: Session = Depends(get_db),
):
    _ensure_folder(db, folder_id)
    page_size = size or settings.search_default_page_size

    total = db.query(func.count(Bookmark.id)).filter(Bookmark.folder_id == folder_id).scalar() or 0
    rows = (
        db.query(Bookmark)
        .filter(Bookmark.folder_id == folder_id)
        .order_by(Bookmark.created_at.desc(), Bookmark.id.desc())
        .offset(page * page_size)
        .limit(page_size)
        .all()
    )
    return Page(
        items=[BookmarkOut.from_entity(b) for b in rows],
        page_index=page,
        page_size=page_size,
        total_elements=total,
    )


@router.put("/bookmarks/{bookmark_id}", response_model=BookmarkOut)
def update_bookmark(bookmark_id: int, payload: BookmarkUpdate, db: Session = Depends(get_db)):
    bookmark = _get_bookmark_or_404(db, bookmark_id)

    if payload.title is not None and payload.title.strip():
        bookmark.title = payload.title
    if payload.url is not None:
        bookmark.url = payload.url
    if payload.description is not None:
        bookmark.description = payload.description
    if payload.folder_id is not None and payload.folder_id != bookmark.folder_id:
        _ensure_folder(db, payload.folder_id)
        bookmark.folder_id = payload.folder_id
    if payload.tag_names is not None:
        bookmark.tags = resolve_tags(db, payload.tag_names)

    commit_or_raise(db)
    db.refresh(bookmark)
    logger.info(f"Bookmark updated id={bookmark.id}")
    return BookmarkOut.from_entity(bookmark)


@router.delete("/bookmarks/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bookmark(bookmark_id: int, db: Session = Depends(get_db)):
    bookmark = _get_bookmark_or_404(db, bookmark_id)
    db.delete(bookmark)
    commit_or_raise(db)
    logger.info(f"Bookmark deleted id={bookmark_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
