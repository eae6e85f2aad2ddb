"""
송장번호 API
- GET /v1/api/next-tracking-number: 새 송장번호 발급
- GET /v1/api/tracking-details: 송장번호 조회
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracking_service.config import settings
from tracking_service.database import get_db
from tracking_service.repositories.tracking_repository import TrackingRepository
from tracking_service.schemas.common import ErrorResponse
from tracking_service.schemas.tracking import TrackingResponse, TrackingStatus
from tracking_service.services import TrackingNumberGenerator, TrackingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/api", tags=["tracking"])

# 생성기는 상태가 없으므로 프로세스 전체에서 공유
_generator = TrackingNumberGenerator()


def get_tracking_service(db: Session = Depends(get_db)) -> TrackingService:
    """FastAPI Depends용 — 요청 세션에 묶인 서비스"""
    return TrackingService(TrackingRepository(db), _generator)


@router.get(
    "/next-tracking-number",
    response_model=TrackingResponse,
    responses={
        400: {"description": "입력값 검증 실패 (필드 → 메시지)"},
        409: {"description": "중복 송장번호", "model": ErrorResponse},
        500: {"description": "송장번호 생성 실패", "model": ErrorResponse},
    },
)
def next_tracking_number(
    originCountryId: str | None = Query(None, description="출발 국가 코드", examples=["US"]),
    destinationCountryId: str | None = Query(None, description="도착 국가 코드", examples=["IN"]),
    weight: str | None = Query(None, description="중량 (kg, 0.1 이상)", examples=["1.5"]),
    customerId: str | None = Query(None, description="고객 UUID (8-4-4-4-12)",
                                   examples=["550e8400-e29b-41d4-a716-446655440000"]),
    customerSlug: str | None = Query(None, description="고객 슬러그", examples=["example-customer"]),
    service: TrackingService = Depends(get_tracking_service),
):
    """새 송장번호 발급. 검증은 서비스에서 한 번에 수행한다 (누락 파라미터 포함)."""
    logger.info(
        f"송장번호 발급 요청: origin={originCountryId}, destination={destinationCountryId}, "
        f"weight={weight}, customerId={customerId}, customerSlug={customerSlug}"
    )
    record = service.create_tracking({
        "originCountryId": originCountryId,
        "destinationCountryId": destinationCountryId,
        "weight": weight,
        "customerId": customerId,
        "customerSlug": customerSlug,
    })
    return TrackingResponse.from_record(record, TrackingStatus.SUCCESS, settings.ESTIMATED_DELIVERY_DAYS)


@router.get(
    "/tracking-details",
    response_model=TrackingResponse,
    responses={
        404: {"description": "송장번호 없음", "model": ErrorResponse},
        500: {"description": "서버 오류", "model": ErrorResponse},
    },
)
def tracking_details(
    trackingId: str | None = Query(None, description="송장번호 (16자리)"),
    service: TrackingService = Depends(get_tracking_service),
):
    """송장번호 조회"""
    logger.info(f"송장번호 조회 요청: trackingId={trackingId}")
    record = service.get_tracking(trackingId)
    return TrackingResponse.from_record(record, TrackingStatus.IN_TRANSIT, settings.ESTIMATED_DELIVERY_DAYS)
