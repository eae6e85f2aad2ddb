"""
프로필 API — 현재 활성 프로필 확인용
"""

from fastapi import APIRouter

from tracking_service.config import settings
from tracking_service.schemas.common import ProfileResponse

router = APIRouter(tags=["profile"])


@router.get("/active-profile", response_model=ProfileResponse)
def active_profile():
    """현재 활성 프로필 반환 (APP_PROFILE)"""
    return ProfileResponse(profile=settings.APP_PROFILE)
