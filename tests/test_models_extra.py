from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from salespulse.models import AggregationResult, MonthlyBucket, ProductTotal, SalesRow


def test_sales_row_validates() -> None:
    rec = {
        "date": datetime(2024, 1, 2, 10, 0),
        "product": "Widget",
        "units": 2,
        "unit_price": 4.5,
        "sales": 9.0,
    }
    row = SalesRow.model_validate(rec)
    assert row.units == 2.0


def test_sales_row_rejects_non_finite_amounts() -> None:
    with pytest.raises(ValidationError):
        SalesRow(date=datetime(2024, 1, 2), product="X", units=1, unit_price=float("inf"), sales=1)


def test_sales_row_rejects_extra_fields() -> None:
    with pytest.raises(ValidationError):
        SalesRow.model_validate(
            {"date": datetime(2024, 1, 2), "product": "X", "units": 1, "unit_price": 1, "sales": 1, "sku": "1"}
        )


def test_models_are_frozen() -> None:
    total = ProductTotal(product="A", total_sales=10, percent=100)
    with pytest.raises(ValidationError):
        total.percent = 50  # type: ignore[misc]


@pytest.mark.parametrize("key", ["2024-1", "24-01", "2024/01"])
def test_monthly_bucket_rejects_malformed_keys(key: str) -> None:
    with pytest.raises(ValidationError):
        MonthlyBucket(key=key, sales=1, transactions=1)


def test_monthly_bucket_requires_a_transaction() -> None:
    with pytest.raises(ValidationError):
        MonthlyBucket(key="2024-01", sales=0, transactions=0)


def test_empty_aggregation_result_defaults() -> None:
    result = AggregationResult()
    assert result.rows == ()
    assert result.naive == 0.0
    assert result.ma == 0.0
