"""
송장번호 관련 Pydantic 스키마
- ShipmentRequest: 발급 요청 입력 (불변). 필드 제약을 한 번에 평가해 위반 필드 전부를 보고한다.
- TrackingResponse: 발급/조회 응답 페이로드
"""

import enum
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Mapping
from uuid import UUID

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from tracking_service.exceptions import InvalidInputError

# 필드(별칭) → 에러 타입 → 메시지. "required"는 누락/None 입력에 쓰인다.
FIELD_MESSAGES: dict[str, dict[str, str]] = {
    "originCountryId": {
        "required": "Origin country ID cannot be blank",
        "blank": "Origin country ID cannot be blank",
        "string_too_long": "Origin country ID must be at most 3 characters long",
    },
    "destinationCountryId": {
        "required": "Destination country ID cannot be blank",
        "blank": "Destination country ID cannot be blank",
        "string_too_long": "Destination country ID must be at most 3 characters long",
    },
    "weight": {
        "required": "Weight is required",
        "greater_than": "Weight must be a positive number",
        "greater_than_equal": "Weight must be at least 0.1",
        "decimal_parsing": "Weight must be a decimal number",
        "finite_number": "Weight must be a decimal number",
    },
    "customerId": {
        "required": "Customer ID is required",
        "uuid_parsing": "Customer ID must be a valid UUID",
    },
    "customerSlug": {
        "required": "Customer slug cannot be blank",
        "blank": "Customer slug cannot be blank",
        "string_too_long": "Customer slug must be at most 50 characters long",
    },
}


class TrackingStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    IN_TRANSIT = "IN_TRANSIT"


class TrackingPriority(str, enum.Enum):
    STANDARD = "STANDARD"


class ShipmentRequest(BaseModel):
    origin_country_id: str = Field(max_length=3, examples=["US"])
    destination_country_id: str = Field(max_length=3, examples=["IN"])
    weight: Decimal = Field(gt=0, ge=Decimal("0.1"), examples=["1.5"])  # kg
    customer_id: UUID = Field(examples=["550e8400-e29b-41d4-a716-446655440000"])
    customer_slug: str = Field(max_length=50, examples=["example-customer"])

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    @field_validator("origin_country_id", "destination_country_id", "customer_slug")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("blank", "must not be blank")
        return value

    @classmethod
    def from_params(cls, data: Mapping[str, Any]) -> "ShipmentRequest":
        """
        원시 입력(쿼리 파라미터 등)을 검증해 ShipmentRequest를 만든다.
        위반 시 InvalidInputError(필드 → 메시지, 위반 필드 전부)를 던진다.
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise InvalidInputError(collect_violations(e)) from e


def collect_violations(error: ValidationError) -> dict[str, str]:
    """pydantic ValidationError → {필드 별칭: 메시지}. 필드당 첫 위반만 남긴다."""
    violations: dict[str, str] = {}
    for err in error.errors():
        field = str(err["loc"][0]) if err["loc"] else "__root__"
        if field in violations:
            continue
        messages = FIELD_MESSAGES.get(field, {})
        if err["type"] == "missing" or err.get("input") is None:
            kind = "required"
        else:
            kind = err["type"]
        violations[field] = messages.get(kind, err["msg"])
    return violations


class TrackingResponse(BaseModel):
    tracking_number: str
    created_at: datetime
    status: TrackingStatus
    estimated_delivery: date
    priority: TrackingPriority = TrackingPriority.STANDARD

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }

    @classmethod
    def from_record(cls, record, status: TrackingStatus, delivery_days: int) -> "TrackingResponse":
        """TrackingNumber ORM → 응답 변환. status/priority/estimatedDelivery는 표시용 값이다."""
        created_at = record.created_at
        # SQLite는 tz 정보를 버리므로 UTC로 복원
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            tracking_number=record.tracking_number,
            created_at=created_at,
            status=status,
            estimated_delivery=datetime.now(timezone.utc).date() + timedelta(days=delivery_days),
            priority=TrackingPriority.STANDARD,
        )
