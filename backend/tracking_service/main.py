"""
FastAPI 앱 엔트리포인트
- CORS 설정
- 라우터 등록 (송장번호, 프로필)
- 예외 핸들러 등록
- 헬스체크 엔드포인트
- 실행: cd backend && uvicorn tracking_service.main:app
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from tracking_service.config import settings
from tracking_service.database import engine, Base, SessionLocal
from tracking_service.api import profile, tracking
from tracking_service.api.errors import register_exception_handlers
from tracking_service.schemas.common import HealthResponse

# 로깅 설정
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 시작 시 테이블 확인"""
    Base.metadata.create_all(bind=engine)
    logger.info(f"데이터베이스 테이블 확인 완료 (profile={settings.APP_PROFILE})")

    yield


app = FastAPI(
    title="Tracking Number Service",
    description="출하 속성 기반 16자리 송장번호 발급 및 조회",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# 라우터 등록
app.include_router(tracking.router)
app.include_router(profile.router)


@app.get("/api/health", response_model=HealthResponse)
def health_check():
    """시스템 상태 확인"""
    db_ok = False
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except Exception as e:
        logger.warning(f"헬스체크 DB 연결 실패: {e}")
    finally:
        db.close()

    return HealthResponse(
        status="ok" if db_ok else "degraded",
        db_connected=db_ok,
        timestamp=datetime.now(timezone.utc),
    )
