"""Presentation helpers shared by the dashboard and the CLI.

Converts an `AggregationResult` into headline figures, chart-ready pandas
frames and display strings. Nothing here feeds back into aggregation.
"""
from __future__ import annotations

import io
import math

import pandas as pd

from salespulse.aggregate.build import aggregate
from salespulse.config import Settings
from salespulse.ingest.parse_csv import parse_csv
from salespulse.models import AggregationResult, SalesSummary


def aggregate_upload(data: bytes, settings: Settings) -> AggregationResult:
    """Parse and aggregate the raw bytes of an uploaded CSV.

    Raises:
        IngestionError: if the upload cannot be parsed or has no records.
    """
    records = parse_csv(
        io.BytesIO(data),
        encoding=settings.csv_encoding,
        delimiter=settings.csv_delimiter,
    )
    return aggregate(records, ma_window=settings.ma_window)


def summarize(result: AggregationResult) -> SalesSummary:
    """Return the headline figures for an aggregation result.

    `last_pct_change` is the latest month's change, or 0 when there is at
    most one month.
    """
    last_pct = result.monthly[-1].pct_change if result.monthly else None
    return SalesSummary(
        total_sales=math.fsum(t.total_sales for t in result.product_totals),
        product_count=len(result.product_totals),
        record_count=len(result.rows),
        naive=result.naive,
        ma=result.ma,
        last_pct_change=last_pct if last_pct is not None else 0.0,
    )


def product_totals_frame(result: AggregationResult, top_n: int | None = None) -> pd.DataFrame:
    """Return product totals as a DataFrame (`product`, `total_sales`, `percent`)."""
    pdf = pd.DataFrame(
        [t.model_dump() for t in result.product_totals],
        columns=["product", "total_sales", "percent"],
    )
    return pdf.head(top_n) if top_n is not None else pdf


def monthly_frame(result: AggregationResult) -> pd.DataFrame:
    """Return the monthly rollup as a DataFrame (`key`, `sales`, `transactions`, `pct_change`)."""
    return pd.DataFrame(
        [b.model_dump() for b in result.monthly],
        columns=["key", "sales", "transactions", "pct_change"],
    )


def format_number(value: float) -> str:
    """Format with thousands separators and at most two decimals."""
    rounded = round(value, 2)
    if rounded == 0:
        rounded = 0.0
    text = f"{rounded:,.2f}"
    return text.rstrip("0").rstrip(".")


def format_money(value: float) -> str:
    """Format a sales amount, e.g. ``1234.5`` → ``"$1,234.5"``."""
    return f"${format_number(value)}"


def format_pct(value: float) -> str:
    """Format a percentage, e.g. ``-40.0`` → ``"-40%"``."""
    return f"{format_number(value)}%"
