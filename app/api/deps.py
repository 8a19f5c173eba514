from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.postgres import get_db
from app.utils.bookmark_search import BookmarkSearchEngine
from app.utils.candidate_fetcher import SqlCandidateFetcher


def get_search_engine(db: Session = Depends(get_db)) -> BookmarkSearchEngine:
    # 요청마다 새 엔진 (세션 외에 공유 상태 없음)
    return BookmarkSearchEngine(SqlCandidateFetcher(db))
