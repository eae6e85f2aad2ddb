"""
애플리케이션 설정
- DB, 프로필, 송장번호 생성 재시도 관련 설정을 관리한다.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # 데이터베이스
    DATABASE_URL: str = "sqlite:///tracking.db"

    # 활성 프로필 (dev, staging, prod)
    APP_PROFILE: str = "dev"

    # 로깅 레벨
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: list[str] = ["*"]

    # 충돌 시 재생성 최대 횟수 (무한 루프 방지용 상한)
    TRACKING_MAX_ATTEMPTS: int = 10

    # INSERT 경합 시 백오프 기준 시간 (초) — 시도마다 2배 + 지터
    TRACKING_RETRY_BACKOFF_SECONDS: float = 0.01

    # 예상 배송일 = 오늘 + N일
    ESTIMATED_DELIVERY_DAYS: int = 3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
