"""
송장번호 생성기 테스트
"""

import random
import re
import time
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from tracking_service.exceptions import GenerationError, InvalidInputError
from tracking_service.services.generator import (
    TrackingNumberGenerator, customer_hash, to_base36, weight_field,
)

CODE_RE = re.compile(r"^[A-Z0-9]{16}$")


class TestFieldHelpers:
    def test_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"
        assert to_base36(1500) == "15O"

    def test_weight_field_truncates_after_three_decimals(self):
        assert weight_field(Decimal("1.5")) == "15O"
        # 1.2349 * 1000 = 1234.9 → 1234
        assert weight_field(Decimal("1.2349")) == to_base36(1234)
        assert weight_field("2.5") == to_base36(2500)

    def test_zero_weight_encodes_to_single_zero(self):
        assert weight_field(Decimal("0")) == "0"
        assert weight_field(0) == "0"
        assert weight_field(Decimal("0.0004")) == "0"

    def test_negative_weight_rejected(self):
        with pytest.raises(GenerationError):
            weight_field(Decimal("-1"))

    def test_huge_weight_rejected_without_expanding(self):
        started = time.monotonic()
        with pytest.raises(GenerationError, match="exceed 16"):
            weight_field(Decimal("1e200000"))
        assert time.monotonic() - started < 1.0

    def test_customer_hash_uses_hex_digits(self):
        assert customer_hash(UUID("550e8400-e29b-41d4-a716-446655440000")) == "55"
        assert customer_hash("abcdef00-0000-0000-0000-000000000000") == "AB"


class TestGenerate:
    def test_example_shipment(self, shipment_kwargs):
        code = TrackingNumberGenerator().generate(**shipment_kwargs)

        assert len(code) == 16
        assert CODE_RE.match(code)
        assert code.startswith("USIN")

    def test_exact_output_with_scripted_rng(self, make_generator, shipment_kwargs):
        generator = make_generator("ABCD" + "XYZ")

        code = generator.generate(**shipment_kwargs)

        # US + IN + 55 + ABCD + 15O(1500) + XYZ
        assert code == "USIN55ABCD15OXYZ"

    def test_same_seed_same_code(self, shipment_kwargs):
        first = TrackingNumberGenerator(random.Random(42)).generate(**shipment_kwargs)
        second = TrackingNumberGenerator(random.Random(42)).generate(**shipment_kwargs)
        assert first == second

    def test_lowercase_codes_are_uppercased(self, make_generator, shipment_kwargs):
        shipment_kwargs.update(origin="us", destination="in")
        code = make_generator("A" * 7).generate(**shipment_kwargs)
        assert code.startswith("USIN")

    def test_short_country_codes_truncate_not_pad(self, make_generator):
        generator = make_generator("RRRR" + "PPPPP")

        code = generator.generate(
            "I", "U", Decimal("1.5"), UUID("123e4567-e89b-12d3-a456-426614174000"), "example-customer",
        )

        # 1자 필드 두 개만큼 패딩이 늘어난다
        assert code == "IU12RRRR15OPPPPP"

    def test_long_country_codes_use_first_two(self, shipment_kwargs):
        shipment_kwargs.update(origin="INDIA", destination="UNITEDSTATES")
        code = TrackingNumberGenerator().generate(**shipment_kwargs)
        assert code.startswith("INUN")
        assert CODE_RE.match(code)

    def test_zero_weight(self, make_generator, shipment_kwargs):
        shipment_kwargs.update(origin="JP", destination="CN", weight=Decimal("0"))
        code = make_generator("AAAA" + "BBBBB").generate(**shipment_kwargs)
        assert code == "JPCN55AAAA0BBBBB"

    def test_heavy_weight_fills_exactly_sixteen(self, shipment_kwargs):
        shipment_kwargs.update(weight=Decimal("999999.99"))
        code = TrackingNumberGenerator().generate(**shipment_kwargs)
        assert len(code) == 16
        assert code.endswith(to_base36(999999990))

    def test_component_overflow(self, shipment_kwargs):
        shipment_kwargs.update(weight=Decimal("99999999"))
        with pytest.raises(GenerationError, match="exceed 16"):
            TrackingNumberGenerator().generate(**shipment_kwargs)

    def test_none_inputs_fail_before_generation(self):
        with pytest.raises(InvalidInputError) as exc_info:
            TrackingNumberGenerator().generate(None, None, None, None, None)

        assert set(exc_info.value.errors) == {
            "originCountryId", "destinationCountryId", "weight", "customerId", "customerSlug",
        }

    def test_non_alphanumeric_country_is_a_defect(self, shipment_kwargs):
        shipment_kwargs.update(origin="U-")
        with pytest.raises(GenerationError, match="invalid"):
            TrackingNumberGenerator().generate(**shipment_kwargs)

    def test_many_random_customers(self):
        generator = TrackingNumberGenerator()
        for _ in range(200):
            code = generator.generate("DE", "FR", Decimal("12.345"), uuid4(), "bulk")
            assert CODE_RE.match(code)


class TestRegenerate:
    def test_fallback_layout(self, make_generator):
        code = make_generator("B" * 12).regenerate("US", "IN")
        assert code == "USIN" + "B" * 12

    def test_fallback_always_sixteen(self):
        generator = TrackingNumberGenerator()
        assert len(generator.regenerate("USA", "IND")) == 16
        # 1자 코드는 남는 자리를 난수로 채운다
        code = generator.regenerate("U", "I")
        assert len(code) == 16
        assert code.startswith("UI")

    def test_fallback_requires_countries(self):
        with pytest.raises(InvalidInputError) as exc_info:
            TrackingNumberGenerator().regenerate(None, "IN")
        assert list(exc_info.value.errors) == ["originCountryId"]
