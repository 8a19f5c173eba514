from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

# 앱 시작 시 로깅 설정 적용
from app.core.logging_config import setup_logging
setup_logging()  # 가장 먼저 호출

# Settings를 초기화하여 .env 계층을 로드
from app.core.settings import settings
from app.core.exceptions import (
    AppException,
    DatabaseException,
    BusinessLogicException,
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)

from app.api.routes.folders import router as folders_router
from app.api.routes.bookmarks import router as bookmarks_router
from app.api.routes.tags import router as tags_router
from app.db.postgres import init_db, get_db
from app.seed.bookmarks_seed import seed_demo_data

logger = logging.getLogger(__name__)


def _seed_if_enabled():
    if not settings.seed_on_startup:
        return
    db = next(get_db())
    try:
        seed_demo_data(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    try:
        # 테이블 준비
        init_db()
    except Exception as e:
        logger.error(f"init_db failed: {e}")

    try:
        _seed_if_enabled()
    except Exception as e:
        logger.error(f"startup seeding failed: {e}")

    yield


app = FastAPI(title="Bookmark API", lifespan=lifespan)


# Exception handlers
@app.exception_handler(DatabaseException)
async def database_exception_handler(request: Request, exc: DatabaseException):
    """데이터베이스 관련 예외 처리"""
    logger.error(f"Database error at {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Database operation failed",
            "type": "database_error",
            "path": str(request.url.path),
        }
    )


@app.exception_handler(ResourceNotFoundException)
async def resource_not_found_handler(request: Request, exc: ResourceNotFoundException):
    """리소스를 찾을 수 없음 예외 처리"""
    logger.warning(f"Resource not found at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=404,
        content={
            "detail": str(exc),
            "type": "resource_not_found",
            "path": str(request.url.path),
        }
    )


@app.exception_handler(ValidationException)
async def validation_exception_handler(request: Request, exc: ValidationException):
    """입력값 검증 실패 예외 처리"""
    logger.warning(f"Validation error at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "type": "validation_error",
            "path": str(request.url.path),
        }
    )


@app.exception_handler(ConflictException)
async def conflict_exception_handler(request: Request, exc: ConflictException):
    """리소스 상태 충돌 예외 처리"""
    logger.warning(f"Conflict at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=409,
        content={
            "detail": str(exc),
            "type": "conflict",
            "path": str(request.url.path),
        }
    )


@app.exception_handler(BusinessLogicException)
async def business_logic_exception_handler(request: Request, exc: BusinessLogicException):
    """비즈니스 로직 예외 처리"""
    logger.warning(f"Business logic error at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "type": "business_logic_error",
            "path": str(request.url.path),
        }
    )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """일반 애플리케이션 예외 처리"""
    logger.warning(f"Application error at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "type": "application_error",
            "path": str(request.url.path),
        }
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(folders_router)
app.include_router(bookmarks_router)
app.include_router(tags_router)


@app.get("/")
def root():
    return {"message": "Hello World!"}
