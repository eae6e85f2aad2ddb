"""
송장번호 서비스 예외 계층

    TrackingServiceError
    ├── InvalidInputError   — 요청 필드 제약 위반 (400)
    ├── GenerationError     — 유효한 후보 코드를 만들 수 없음 (500)
    ├── DuplicateError      — 재시도로도 해소되지 않은 중복 INSERT (409)
    └── NotFoundError       — 조회 대상 없음 (404)

HTTP 상태 코드 매핑은 api.errors에서 담당한다.
"""

from typing import Any


class TrackingServiceError(Exception):
    """서비스 공통 예외. label은 에러 응답의 errorDetails로 노출된다."""

    label: str = "Tracking Service Error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "label": self.label,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class InvalidInputError(TrackingServiceError):
    """필드명 → 위반 메시지 매핑을 들고 다닌다. 위반된 필드 전부를 담는다."""

    label = "Invalid Input Error"

    def __init__(self, errors: dict[str, str], message: str | None = None):
        self.errors = dict(errors)
        if message is None:
            joined = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
            message = f"Validation failed: {joined}"
        super().__init__(message, details={"errors": self.errors})


class GenerationError(TrackingServiceError):
    label = "Tracking Number Generation Error"


class DuplicateError(TrackingServiceError):
    label = "Duplicate Tracking Number Error"

    def __init__(self, tracking_number: str, message: str | None = None):
        self.tracking_number = tracking_number
        super().__init__(
            message or f"Tracking number already exists: {tracking_number}",
            details={"tracking_number": tracking_number},
        )


class NotFoundError(TrackingServiceError):
    label = "Tracking ID not found"

    def __init__(self, tracking_number: str):
        self.tracking_number = tracking_number
        super().__init__(
            f"Tracking details not found for ID: {tracking_number}",
            details={"tracking_number": tracking_number},
        )
