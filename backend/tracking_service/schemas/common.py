"""
공통 Pydantic 스키마
"""

from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class HealthResponse(BaseModel):
    status: str
    db_connected: bool
    timestamp: datetime


class ProfileResponse(BaseModel):
    profile: str


class ErrorResponse(BaseModel):
    """에러 응답 본문 — {timestamp, message, errorDetails, status}"""

    timestamp: datetime
    message: str
    error_details: str
    status: int

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
