"""
폴더 트리 조립 모듈.

모든 폴더(부모 포인터)와 모든 북마크를 한 번에 받아
재귀 조회 없이 메모리에서 트리(forest)를 만듭니다.
"""
from __future__ import annotations
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Protocol
import logging

from app.schemas.bookmark import BookmarkOut
from app.schemas.folder import FolderTreeOut

logger = logging.getLogger(__name__)


class FolderRecord(Protocol):
    id: int
    name: str
    parent_id: Optional[int]


def build_folder_tree(
    folders: Iterable[FolderRecord],
    bookmarks: Iterable[BookmarkOut],
) -> List[FolderTreeOut]:
    """
    평면 폴더/북마크 목록으로 폴더 트리를 조립.

    1. 북마크를 folder_id 기준으로 묶음
    2. 폴더마다 노드를 만들고 id로 색인
    3. 두 번째 순회에서 부모 노드의 children에 연결 (부모 없으면 루트)

    부모 id가 목록에 없는 폴더(고아)는 트리에서 빠지고 경고 로그만 남깁니다.
    순환 참조는 검사하지 않습니다.

    Args:
        folders: 전체 폴더 레코드 (id, name, parent_id)
        bookmarks: 전체 북마크 (folder_id 포함)

    Returns:
        최상위 폴더 노드 리스트 (입력 순서 유지)
    """
    folders = list(folders)

    bookmarks_by_folder: Dict[int, List[BookmarkOut]] = defaultdict(list)
    for bookmark in bookmarks:
        bookmarks_by_folder[bookmark.folder_id].append(bookmark)

    nodes: Dict[int, FolderTreeOut] = {}
    for folder in folders:
        nodes[folder.id] = FolderTreeOut(
            id=folder.id,
            name=folder.name,
            parent_id=folder.parent_id,
            children=[],
            bookmarks=bookmarks_by_folder.get(folder.id, []),
        )

    roots: List[FolderTreeOut] = []
    orphans = 0
    for folder in folders:
        node = nodes[folder.id]
        if folder.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(folder.parent_id)
        if parent is not None:
            parent.children.append(node)
        else:
            orphans += 1
            logger.warning(
                f"Folder {folder.id} references missing parent {folder.parent_id}; "
                "omitting it from the tree"
            )

    logger.info(f"Constructed folder tree with {len(roots)} root folders ({orphans} orphaned).")
    return roots
