from fastapi import APIRouter, Depends, Query, Response, status
from typing import List, Optional
import logging
from sqlalchemy.orm import Session

from app.core.exceptions import (
    BusinessLogicException,
    ConflictException,
    ResourceNotFoundException,
)
from app.db.postgres import get_db, commit_or_raise
from app.models.bookmark import Bookmark
from app.models.folder import Folder
from app.schemas.bookmark import BookmarkOut
from app.schemas.folder import FolderCreate, FolderOut, FolderTreeOut, FolderUpdate
from app.utils.folder_tree import build_folder_tree

router = APIRouter(prefix="/api/v1/folders", tags=["folders"])
logger = logging.getLogger(__name__)


def _get_folder_or_404(db: Session, folder_id: int, what: str = "folder") -> Folder:
    folder = db.get(Folder, folder_id)
    if folder is None:
        raise ResourceNotFoundException(f"{what} not found: id={folder_id}")
    return folder


def _find_sibling_by_name(db: Session, name: str, parent_id: Optional[int]) -> Optional[Folder]:
    q = db.query(Folder).filter(Folder.name == name)
    if parent_id is None:
        q = q.filter(Folder.parent_id.is_(None))
    else:
        q = q.filter(Folder.parent_id == parent_id)
    return q.first()


def _is_descendant(candidate: Folder, ancestor_id: int) -> bool:
    """candidate가 ancestor_id 폴더 자신이거나 그 하위 폴더인지"""
    current = candidate
    while current is not None:
        if current.id == ancestor_id:
            return True
        current = current.parent
    return False


@router.post("", response_model=FolderOut, status_code=status.HTTP_201_CREATED)
def create_folder(payload: FolderCreate, db: Session = Depends(get_db)):
    logger.info(f"Creating folder name={payload.name!r} parent_id={payload.parent_id}")

    if payload.parent_id is not None:
        _get_folder_or_404(db, payload.parent_id, "parent folder")

    if _find_sibling_by_name(db, payload.name, payload.parent_id):
        raise ConflictException(f"a folder with the same name already exists here: {payload.name}")

    folder = Folder(name=payload.name, parent_id=payload.parent_id)
    db.add(folder)
    commit_or_raise(db)
    db.refresh(folder)

    logger.info(f"Folder created id={folder.id}")
    return folder


@router.get("/top", response_model=List[FolderOut])
def list_top_level_folders(db: Session = Depends(get_db)):
    return (
        db.query(Folder)
        .filter(Folder.parent_id.is_(None))
        .order_by(Folder.id.asc())
        .all()
    )


@router.get("/tree", response_model=List[FolderTreeOut])
def get_folder_tree(db: Session = Depends(get_db)):
    # 폴더/북마크를 한 번씩만 조회하고 메모리에서 조립
    logger.info("Fetching the entire folder tree structure.")
    folders = db.query(Folder).order_by(Folder.id.asc()).all()
    bookmarks = db.query(Bookmark).order_by(Bookmark.id.asc()).all()
    return build_folder_tree(folders, [BookmarkOut.from_entity(b) for b in bookmarks])


@router.get("/{folder_id}", response_model=FolderOut)
def get_folder(folder_id: int, db: Session = Depends(get_db)):
    return _get_folder_or_404(db, folder_id)


@router.get("/{folder_id}/children", response_model=List[FolderOut])
def list_child_folders(folder_id: int, db: Session = Depends(get_db)):
    _get_folder_or_404(db, folder_id, "parent folder")
    return (
        db.query(Folder)
        .filter(Folder.parent_id == folder_id)
        .order_by(Folder.id.asc())
        .all()
    )


@router.put("/{folder_id}", response_model=FolderOut)
def update_folder(folder_id: int, payload: FolderUpdate, db: Session = Depends(get_db)):
    folder = _get_folder_or_404(db, folder_id)

    # 부모 변경: 필드가 요청에 포함된 경우에만 (null이면 최상위로 이동)
    new_parent_id = folder.parent_id
    if "parent_id" in payload.model_fields_set:
        new_parent_id = payload.parent_id
        if new_parent_id is not None:
            if new_parent_id == folder.id:
                raise BusinessLogicException("a folder cannot be its own parent")
            new_parent = _get_folder_or_404(db, new_parent_id, "new parent folder")
            if _is_descendant(new_parent, folder.id):
                raise BusinessLogicException("a folder cannot be moved under its own descendant")

    new_name = folder.name
    if payload.name is not None and payload.name.strip():
        new_name = payload.name

    if new_name != folder.name or new_parent_id != folder.parent_id:
        existing = _find_sibling_by_name(db, new_name, new_parent_id)
        if existing is not None and existing.id != folder.id:
            raise ConflictException(f"a folder with the same name already exists here: {new_name}")

    folder.name = new_name
    folder.parent_id = new_parent_id
    commit_or_raise(db)
    db.refresh(folder)
    return folder


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_folder(
    folder_id: int,
    force: bool = Query(False, description="하위 폴더와 북마크까지 함께 삭제"),
    db: Session = Depends(get_db),
):
    folder = _get_folder_or_404(db, folder_id)

    if not force:
        has_children = db.query(Folder.id).filter(Folder.parent_id == folder_id).first() is not None
        has_bookmarks = db.query(Bookmark.id).filter(Bookmark.folder_id == folder_id).first() is not None
        if has_children or has_bookmarks:
            raise ConflictException(
                "folder is not empty and cannot be deleted; use force=true to delete its contents"
            )

    # children/bookmarks 관계의 cascade로 하위 항목까지 삭제됨
    db.delete(folder)
    commit_or_raise(db)
    logger.info(f"Folder deleted id={folder_id} force={force}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
