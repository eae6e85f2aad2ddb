"""
데이터베이스 엔진 및 세션 관리
- 기본은 SQLite, DATABASE_URL로 교체 가능.
- FastAPI dependency injection용 get_db() 제공.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from tracking_service.config import settings


def _engine_kwargs(url: str) -> dict:
    """SQLite일 때만 필요한 엔진 옵션"""
    if not url.startswith("sqlite"):
        return {}
    # SQLite에서는 check_same_thread=False 필요 (FastAPI 멀티스레드 대응)
    kwargs = {"connect_args": {"check_same_thread": False}}
    # 인메모리 DB는 커넥션 하나를 공유해야 테이블이 유지된다
    if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    **_engine_kwargs(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI Depends용 DB 세션 제공."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
