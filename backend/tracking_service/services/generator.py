"""
송장번호 생성기 — 출하 속성으로 16자리 후보 코드를 만든다.
- 입출력/공유 상태 없음. 난수원은 주입받는다 (테스트에서 고정 시퀀스 사용).
- 1차 생성: 출발국(2) + 도착국(2) + 고객해시(2) + 난수(4) + 중량 base36 + 난수 패딩
- 충돌 후 재생성: 출발국(2) + 도착국(2) + 난수 (16자까지)
"""

import logging
import re
import secrets
import string
from decimal import Decimal, InvalidOperation
from uuid import UUID

from tracking_service.exceptions import GenerationError, InvalidInputError

logger = logging.getLogger(__name__)

ALPHANUMERIC = string.ascii_uppercase + string.digits  # A-Z0-9, 36자
TRACKING_NUMBER_LENGTH = 16
COUNTRY_FIELD_LENGTH = 2
CUSTOMER_HASH_LENGTH = 2
RANDOM_FIELD_LENGTH = 4
WEIGHT_MULTIPLIER = 1000  # 소수점 셋째 자리까지 보존
TRACKING_NUMBER_PATTERN = re.compile(r"[A-Z0-9]{16}")
# 이 값 이상이면 base36으로 16자를 넘는다
MAX_SCALED_WEIGHT = 36 ** TRACKING_NUMBER_LENGTH


def to_base36(value: int) -> str:
    """음이 아닌 정수 → 대문자 base36 문자열 (0 → "0")"""
    if value < 0:
        raise ValueError(f"base36 인코딩은 음수를 지원하지 않음: {value}")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(string.digits[rem] if rem < 10 else string.ascii_uppercase[rem - 10])
    return "".join(reversed(digits))


def country_field(code: str) -> str:
    """국가 코드 앞 2자리 (짧으면 있는 만큼)"""
    return code.upper()[:COUNTRY_FIELD_LENGTH]


def customer_hash(customer_id: UUID | str) -> str:
    """고객 UUID의 16진수 앞 2자리"""
    if not isinstance(customer_id, UUID):
        customer_id = UUID(str(customer_id))
    return customer_id.hex[:CUSTOMER_HASH_LENGTH].upper()


def weight_field(weight: Decimal | float | int | str) -> str:
    """중량 × 1000 을 정수로 절사한 뒤 base36 인코딩"""
    if not isinstance(weight, Decimal):
        weight = Decimal(str(weight))
    if weight < 0:
        raise GenerationError(f"Weight must not be negative: {weight}")
    # 정수로 펼치기 전에 자릿수 상한 확인 (1e900000 같은 입력)
    if weight * WEIGHT_MULTIPLIER >= MAX_SCALED_WEIGHT:
        raise GenerationError(
            f"Generated components exceed {TRACKING_NUMBER_LENGTH} characters (weight too large: {weight})"
        )
    return to_base36(int(weight * WEIGHT_MULTIPLIER))


class TrackingNumberGenerator:
    """
    송장번호 후보 생성기.

    사용법:
        generator = TrackingNumberGenerator()                 # secrets.SystemRandom
        generator = TrackingNumberGenerator(random.Random(7))  # 테스트용 고정 시드
        code = generator.generate("US", "IN", Decimal("1.5"), customer_id, "example-customer")
    """

    def __init__(self, rng=None):
        # rng는 choice(seq)만 있으면 된다
        self._rng = rng if rng is not None else secrets.SystemRandom()

    def random_alphanumeric(self, length: int) -> str:
        return "".join(self._rng.choice(ALPHANUMERIC) for _ in range(length))

    def generate(
        self,
        origin: str,
        destination: str,
        weight: Decimal,
        customer_id: UUID | str,
        customer_slug: str,
    ) -> str:
        """1차 후보 코드 생성. customer_slug는 계약상 받지만 코드에는 쓰이지 않는다."""
        missing = {
            name: f"{name} is required"
            for name, value in (
                ("originCountryId", origin),
                ("destinationCountryId", destination),
                ("weight", weight),
                ("customerId", customer_id),
                ("customerSlug", customer_slug),
            )
            if value is None
        }
        if missing:
            raise InvalidInputError(missing)

        try:
            customer = customer_hash(customer_id)
        except ValueError:
            raise InvalidInputError({"customerId": "Customer ID must be a valid UUID"})
        try:
            weight_part = weight_field(weight)
        except (InvalidOperation, ValueError, OverflowError):
            raise InvalidInputError({"weight": "Weight must be a decimal number"})

        prefix = (
            country_field(origin)
            + country_field(destination)
            + customer
            + self.random_alphanumeric(RANDOM_FIELD_LENGTH)
            + weight_part
        )
        remaining = TRACKING_NUMBER_LENGTH - len(prefix)
        if remaining < 0:
            raise GenerationError(
                f"Generated components exceed {TRACKING_NUMBER_LENGTH} characters "
                f"({len(prefix)} before padding)"
            )

        return self.validate(prefix + self.random_alphanumeric(remaining))

    def regenerate(self, origin: str, destination: str) -> str:
        """충돌 후 재생성 — 고객해시/중량 계산 없이 국가 코드 + 난수"""
        if origin is None or destination is None:
            raise InvalidInputError({
                name: f"{name} is required"
                for name, value in (("originCountryId", origin), ("destinationCountryId", destination))
                if value is None
            })
        prefix = country_field(origin) + country_field(destination)
        return self.validate(prefix + self.random_alphanumeric(TRACKING_NUMBER_LENGTH - len(prefix)))

    @staticmethod
    def validate(code: str) -> str:
        """최종 검증. 여기서 실패하면 입력 문제가 아니라 조합 로직 결함이다."""
        if not TRACKING_NUMBER_PATTERN.fullmatch(code):
            logger.error(f"잘못된 송장번호 생성됨: {code!r}")
            raise GenerationError(f"Generated tracking number is invalid: {code!r}")
        return code
