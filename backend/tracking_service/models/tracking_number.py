"""
tracking_number 테이블 — 발급된 송장번호와 발급 시점의 출하 정보
- tracking_number가 PK이므로 중복 발급은 DB 제약으로 막힌다.
- 생성 후 수정/삭제 경로 없음.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Numeric, DateTime, Uuid

from tracking_service.database import Base


class TrackingNumber(Base):
    __tablename__ = "tracking_number"

    tracking_number = Column(String(16), primary_key=True)  # "USIN55X7K2A4B9QZ"
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    origin_country_id = Column(String(3), nullable=False)
    destination_country_id = Column(String(3), nullable=False)
    weight = Column(Numeric(12, 3), nullable=False)  # kg
    customer_id = Column(Uuid, nullable=False)
    customer_slug = Column(String(50), nullable=False)

    def __repr__(self) -> str:
        return f"<TrackingNumber {self.tracking_number}>"
