"""
서비스 패키지
- TrackingNumberGenerator: 후보 코드 생성 (순수 함수, 주입 난수원)
- TrackingService: 충돌 해소 + 저장 + 조회
"""

from tracking_service.services.generator import TrackingNumberGenerator
from tracking_service.services.tracking_service import TrackingService

__all__ = [
    "TrackingNumberGenerator",
    "TrackingService",
]
