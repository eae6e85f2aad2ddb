"""
송장번호 발급/조회 서비스 — 생성기 + 저장소를 묶어 유일한 코드를 확정한다.

발급 흐름:
  1. 요청 검증 (위반 필드 전부 보고)
  2. 1차 후보 생성 → 존재 여부 확인
  3. 충돌 시 재생성(국가코드 + 난수) 후 재확인
  4. INSERT. PK 위반(동시 요청 경합)도 충돌로 보고 백오프 후 재생성
  5. 후보 수가 max_attempts에 도달하면 중단

확인-후-INSERT는 원자적이지 않다. 유일성은 PK 제약이 보장하고, 사전 확인은 최적화일 뿐이다.
"""

import logging
import random
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from tracking_service.config import settings
from tracking_service.exceptions import (
    DuplicateError, GenerationError, InvalidInputError, NotFoundError, TrackingServiceError,
)
from tracking_service.models import TrackingNumber
from tracking_service.repositories.tracking_repository import TrackingRepository
from tracking_service.schemas.tracking import ShipmentRequest
from tracking_service.services.generator import TrackingNumberGenerator

logger = logging.getLogger(__name__)


class TrackingService:
    """송장번호 발급/조회 서비스"""

    def __init__(
        self,
        repository: TrackingRepository,
        generator: TrackingNumberGenerator | None = None,
        max_attempts: int | None = None,
        backoff_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        jitter: random.Random | None = None,
    ):
        self.repository = repository
        self.generator = generator or TrackingNumberGenerator()
        self.max_attempts = max_attempts if max_attempts is not None else settings.TRACKING_MAX_ATTEMPTS
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.backoff_seconds = (
            backoff_seconds if backoff_seconds is not None else settings.TRACKING_RETRY_BACKOFF_SECONDS
        )
        self._sleep = sleep
        self._jitter = jitter or random.Random()

    def create_tracking(self, request: ShipmentRequest | Mapping[str, Any]) -> TrackingNumber:
        """송장번호 발급. 검증 실패는 생성 시도 전에 InvalidInputError로 끝난다."""
        if not isinstance(request, ShipmentRequest):
            request = ShipmentRequest.from_params(request)
        logger.debug(f"송장번호 발급 요청: {request!r}")

        try:
            record = self._resolve_and_insert(request)
        except TrackingServiceError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"송장번호 발급 중 DB 오류: {e}")
            raise GenerationError("Error generating tracking number") from e

        logger.info(f"송장번호 발급 완료: {record.tracking_number}")
        return record

    def get_tracking(self, tracking_number: str) -> TrackingNumber:
        """PK 단건 조회. 없으면 NotFoundError."""
        if tracking_number is None or not tracking_number.strip():
            raise InvalidInputError({"trackingId": "Tracking ID cannot be blank"})

        record = self.repository.find_by_code(tracking_number)
        if record is None:
            logger.warning(f"송장번호 조회 실패 (없음): {tracking_number}")
            raise NotFoundError(tracking_number)
        return record

    def _resolve_and_insert(self, request: ShipmentRequest) -> TrackingNumber:
        code = self.generator.generate(
            request.origin_country_id,
            request.destination_country_id,
            request.weight,
            request.customer_id,
            request.customer_slug,
        )
        collisions = 0

        while True:
            if self.repository.exists(code):
                collisions += 1
                logger.warning(
                    f"송장번호 충돌: {code} ({collisions}/{self.max_attempts}) — 재생성"
                )
                if collisions >= self.max_attempts:
                    raise GenerationError(
                        f"Unable to generate unique tracking number after {collisions} attempts"
                    )
            else:
                try:
                    return self.repository.insert(self._build_record(code, request))
                except DuplicateError:
                    # 사전 확인과 INSERT 사이에 다른 요청이 같은 코드를 먼저 저장함
                    collisions += 1
                    logger.warning(
                        f"송장번호 INSERT 경합: {code} ({collisions}/{self.max_attempts}) — 재생성"
                    )
                    if collisions >= self.max_attempts:
                        raise
                    self._backoff(collisions)

            code = self.generator.regenerate(request.origin_country_id, request.destination_country_id)

    def _build_record(self, code: str, request: ShipmentRequest) -> TrackingNumber:
        return TrackingNumber(
            tracking_number=code,
            created_at=datetime.now(timezone.utc),
            origin_country_id=request.origin_country_id,
            destination_country_id=request.destination_country_id,
            weight=request.weight,
            customer_id=request.customer_id,
            customer_slug=request.customer_slug,
        )

    def _backoff(self, attempt: int):
        """지수 백오프 + full jitter"""
        if self.backoff_seconds <= 0:
            return
        delay = self._jitter.uniform(0, self.backoff_seconds * (2 ** (attempt - 1)))
        logger.debug(f"INSERT 재시도 전 대기 {delay * 1000:.1f}ms")
        self._sleep(delay)
