"""Record cleaning: loosely-typed records in, validated `SalesRow`s out.

`to_row` is a fallible conversion: it returns ``None`` for a record that
lacks a parseable date or finite units, unit price and sales. Such records
are dropped by `clean_records` without being collected anywhere.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from salespulse.clean.resolve import first_present, parse_date, to_number, to_product
from salespulse.models import SalesRow

log = logging.getLogger(__name__)


def resolve_sales(raw_sales: Any, units: float, unit_price: float) -> float:
    """Return the explicit sales value when numeric, else ``units * unit_price``.

    An explicit zero counts as a value and is kept.
    """
    explicit = to_number(raw_sales)
    if math.isnan(explicit):
        return units * unit_price
    return explicit


def to_row(record: Mapping[str, Any]) -> SalesRow | None:
    """Convert one parsed record into a `SalesRow`, or None if it is invalid.

    Args:
        record: Mapping from normalized header name to cell value.
    """
    date = parse_date(first_present(record, "date"))
    if date is None:
        return None

    units = to_number(first_present(record, "units"))
    unit_price = to_number(first_present(record, "unit_price"))
    sales = resolve_sales(first_present(record, "sales"), units, unit_price)

    if not all(math.isfinite(v) for v in (units, unit_price, sales)):
        return None

    return SalesRow(
        date=date,
        product=to_product(first_present(record, "product")),
        units=units,
        unit_price=unit_price,
        sales=sales,
    )


def clean_records(records: Iterable[Mapping[str, Any]]) -> list[SalesRow]:
    """Convert records to rows, drop invalid ones and sort by date.

    The sort is stable, so rows sharing a timestamp keep their input order.

    Returns:
        Valid rows in ascending date order.
    """
    rows: list[SalesRow] = []
    dropped = 0
    for rec in records:
        row = to_row(rec)
        if row is None:
            dropped += 1
            continue
        rows.append(row)

    rows.sort(key=lambda r: r.date)
    log.info("Clean complete: good=%d bad=%d", len(rows), dropped)
    return rows
