from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from pydelivery.models import PackageRecord, PostalTotal


def test_record_is_frozen() -> None:
    record = PackageRecord(postal_code="12345", weight=Decimal("1.5"))
    with pytest.raises(ValidationError):
        record.weight = Decimal("2")  # type: ignore[misc]


@pytest.mark.parametrize(
    ("postal_code", "weight"),
    [
        ("1234", Decimal("1")),
        ("123456", Decimal("1")),
        ("12a45", Decimal("1")),
        ("12345", Decimal("-0.5")),
        ("12345", Decimal("1.2345")),
    ],
)
def test_record_rejects_invalid_fields(postal_code: str, weight: Decimal) -> None:
    with pytest.raises(ValidationError):
        PackageRecord(postal_code=postal_code, weight=weight)


def test_record_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        PackageRecord(postal_code="12345", weight=Decimal("1"), note="x")  # type: ignore[call-arg]


def test_total_has_no_decimal_place_limit() -> None:
    total = PostalTotal(postal_code="00001", total_weight=Decimal("10.000"))
    assert total.total_weight == Decimal("10")
