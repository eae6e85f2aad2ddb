"""
Pytest 설정 및 공용 fixture
- 앱 모듈 import 전에 인메모리 SQLite로 환경을 고정한다.
"""

import os
from decimal import Decimal
from uuid import UUID

import pytest

# app 모듈 import 전에 설정
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["APP_PROFILE"] = "test"
os.environ["TRACKING_RETRY_BACKOFF_SECONDS"] = "0"

CUSTOMER_ID = UUID("550e8400-e29b-41d4-a716-446655440000")


class ScriptedRandom:
    """choice()마다 미리 정한 문자를 순서대로 돌려주는 난수원"""

    def __init__(self, chars: str):
        self._chars = iter(chars)

    def choice(self, seq):
        char = next(self._chars)
        assert char in seq
        return char


@pytest.fixture
def make_generator():
    """고정 문자열을 난수원으로 쓰는 생성기 팩토리"""
    from tracking_service.services.generator import TrackingNumberGenerator

    def _make(chars: str):
        return TrackingNumberGenerator(ScriptedRandom(chars))

    return _make


@pytest.fixture
def valid_params() -> dict:
    return {
        "originCountryId": "US",
        "destinationCountryId": "IN",
        "weight": "1.5",
        "customerId": str(CUSTOMER_ID),
        "customerSlug": "example-customer",
    }


@pytest.fixture
def shipment_kwargs() -> dict:
    """generate()용 위치 인자 대신 쓰는 키워드 묶음"""
    return {
        "origin": "US",
        "destination": "IN",
        "weight": Decimal("1.5"),
        "customer_id": CUSTOMER_ID,
        "customer_slug": "example-customer",
    }


@pytest.fixture
def db_session():
    """테스트마다 테이블을 새로 만들고 끝나면 지운다."""
    from tracking_service.database import Base, SessionLocal, engine
    from tracking_service.models import TrackingNumber  # noqa: F401

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def repository(db_session):
    from tracking_service.repositories.tracking_repository import TrackingRepository

    return TrackingRepository(db_session)


@pytest.fixture
def client(db_session):
    from fastapi.testclient import TestClient

    from tracking_service.main import app

    yield TestClient(app)
    app.dependency_overrides.clear()
