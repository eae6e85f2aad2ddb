"""
SQLAlchemy ORM 모델 패키지
- 모든 모델을 여기서 import하여 Base.metadata에 등록한다.
"""

from tracking_service.models.tracking_number import TrackingNumber

__all__ = [
    "TrackingNumber",
]
