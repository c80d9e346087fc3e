"""Field resolution helpers for loosely-typed CSV records.

Each logical field of a sales row is looked up through an ordered list of
candidate keys; the first present value wins. Header names are normally
lowercased by ingestion, but the capitalized legacy keys are kept for
records that arrive from other sources untouched.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Mapping

import numpy as np
import pandas as pd

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "date": ("date", "order_date", "tarih"),
    "product": ("product", "ürün", "Product"),
    "units": ("units", "quantity", "adet", "Units", "Quantity"),
    "unit_price": ("unit_price", "price", "Unit_Price", "Price"),
    "sales": ("sales", "revenue", "ciro", "Sales", "Revenue"),
}

UNKNOWN_PRODUCT = "Unknown"


def is_present(value: Any) -> bool:
    """Return False for None, pandas/numpy missing markers and blank strings."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return False
    return True


def first_present(record: Mapping[str, Any], field: str) -> Any:
    """Return the first present value among the aliases of `field`, else None."""
    for key in FIELD_ALIASES[field]:
        value = record.get(key)
        if is_present(value):
            return value
    return None


def to_number(value: Any) -> float:
    """Coerce a cell value to float; anything unusable becomes NaN."""
    if not is_present(value) or isinstance(value, (bool, np.bool_)):
        return math.nan
    if isinstance(value, str):
        value = value.strip()
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def _to_local_naive(dt: datetime) -> datetime:
    """Drop timezone info, converting aware values to the local zone first."""
    if isinstance(dt, pd.Timestamp):
        dt = dt.to_pydatetime()
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_date(value: Any) -> datetime | None:
    """Parse a cell into a naive local datetime, or None when it is not a date.

    Numbers are read as epoch milliseconds (UTC). Strings go through
    `pandas.to_datetime`, so ISO dates, ``"03/21/2024"`` and similar formats
    are accepted.
    """
    if not is_present(value) or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    try:
        if isinstance(value, (int, float, np.integer, np.floating)):
            ts = pd.to_datetime(value, unit="ms", utc=True)
        else:
            ts = pd.to_datetime(str(value).strip())
    except (TypeError, ValueError, OverflowError):
        return None

    if pd.isna(ts):
        return None
    return _to_local_naive(ts)


def to_product(value: Any) -> str:
    """Render a product cell as text, defaulting to ``"Unknown"``."""
    if not is_present(value):
        return UNKNOWN_PRODUCT
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip() or UNKNOWN_PRODUCT


def month_key(dt: datetime) -> str:
    """Return the ``YYYY-MM`` bucket key for a local date-time."""
    return f"{dt.year:04d}-{dt.month:02d}"
