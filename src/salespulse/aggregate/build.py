"""Aggregation functions.

Functions in this module build the dashboard datasets from cleaned rows.
Everything is computed eagerly with pandas; inputs are small enough to fit
in memory and every call starts from scratch.

Expectations:
- Input: date-sorted `SalesRow`s from `salespulse.clean.transform`
- Outputs: tuples of pydantic models, documented on each function
"""
from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping, Sequence

import pandas as pd

from salespulse.clean.resolve import month_key
from salespulse.clean.transform import clean_records
from salespulse.config import DEFAULT_MA_WINDOW
from salespulse.models import AggregationResult, MonthlyBucket, ProductTotal, SalesRow

log = logging.getLogger(__name__)


def rows_to_frame(rows: Sequence[SalesRow]) -> pd.DataFrame:
    """Return a DataFrame with `product`, `month` and `sales` columns.

    Row order is preserved, which the grouped outputs rely on for ties.
    """
    return pd.DataFrame(
        {
            "product": [r.product for r in rows],
            "month": [month_key(r.date) for r in rows],
            "sales": [r.sales for r in rows],
        },
        columns=["product", "month", "sales"],
    )


# =========================================================
# PRODUCT TOTALS
# =========================================================

def product_totals(pdf: pd.DataFrame) -> tuple[ProductTotal, ...]:
    """Return per-product sales totals with their share of the grand total.

    Args:
        pdf: Frame from `rows_to_frame`.

    Returns:
        ProductTotals sorted by `total_sales` descending. Products with equal
        totals keep the order in which they first appear. `percent` is 0 for
        every product when the grand total is 0 or overflows to infinity.
    """
    if pdf.empty:
        return ()

    totals = (
        pdf.groupby("product", sort=False)["sales"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )

    grand_total = float(totals.sum())
    if not math.isfinite(grand_total):
        log.warning("Grand total overflowed (%s); reporting percent as 0", grand_total)
        percent = pd.Series(0.0, index=totals.index)
    elif grand_total:
        percent = totals / grand_total * 100.0
    else:
        percent = pd.Series(0.0, index=totals.index)

    return tuple(
        ProductTotal(product=str(product), total_sales=float(total), percent=float(pct))
        for (product, total), pct in zip(totals.items(), percent)
    )


# =========================================================
# MONTHLY ROLLUP
# =========================================================

def monthly_rollup(pdf: pd.DataFrame) -> tuple[MonthlyBucket, ...]:
    """Return monthly sales and transaction counts with month-over-month change.

    Args:
        pdf: Frame from `rows_to_frame`.

    Returns:
        MonthlyBuckets sorted ascending by ``YYYY-MM`` key. `pct_change` is
        None on the first bucket and 0 wherever the previous month's sales
        are 0.
    """
    if pdf.empty:
        return ()

    monthly = (
        pdf.groupby("month", sort=True)
        .agg(sales=("sales", "sum"), transactions=("sales", "size"))
        .reset_index()
    )

    prev = monthly["sales"].shift(1)
    monthly["pct_change"] = ((monthly["sales"] - prev) / prev * 100.0).where(prev != 0, 0.0)

    buckets: list[MonthlyBucket] = []
    for i, rec in enumerate(monthly.to_dict(orient="records")):
        buckets.append(
            MonthlyBucket(
                key=rec["month"],
                sales=float(rec["sales"]),
                transactions=int(rec["transactions"]),
                pct_change=None if i == 0 else float(rec["pct_change"]),
            )
        )
    return tuple(buckets)


# =========================================================
# FORECAST BASELINES
# =========================================================

def baselines(monthly: Sequence[MonthlyBucket], window: int = DEFAULT_MA_WINDOW) -> tuple[float, float]:
    """Return the `(naive, ma)` forecast baselines for a monthly rollup.

    `naive` is the latest month's sales; `ma` is the mean of the last
    ``min(window, len(monthly))`` months. Both are 0 for an empty rollup.

    Raises:
        ValueError: if `window` is smaller than 1.
    """
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    if not monthly:
        return 0.0, 0.0

    sales = pd.Series([b.sales for b in monthly], dtype=float)
    naive = float(sales.iloc[-1])
    ma = float(sales.tail(window).mean())
    return naive, ma


# =========================================================
# ENTRY POINT
# =========================================================

def aggregate(
    records: Iterable[Mapping[str, Any]],
    ma_window: int = DEFAULT_MA_WINDOW,
) -> AggregationResult:
    """Clean parsed records and compute every dashboard dataset.

    Pure function: the same input always yields an equal result, and
    nothing is kept between calls.

    Args:
        records: Parsed CSV records keyed by normalized header name.
        ma_window: Number of trailing months averaged by the `ma` baseline.

    Returns:
        AggregationResult with `rows`, `product_totals`, `monthly`, `naive`
        and `ma`.
    """
    rows = clean_records(records)
    pdf = rows_to_frame(rows)

    totals = product_totals(pdf)
    monthly = monthly_rollup(pdf)
    naive, ma = baselines(monthly, ma_window)

    log.info(
        "Aggregated %d rows into %d products and %d months (naive=%.2f ma=%.2f)",
        len(rows),
        len(totals),
        len(monthly),
        naive,
        ma,
    )
    return AggregationResult(
        rows=tuple(rows),
        product_totals=totals,
        monthly=monthly,
        naive=naive,
        ma=ma,
    )
