"""Pydantic models for cleaned rows and aggregation outputs.

These models define the typed Row produced by the Clean step and the
immutable result snapshot consumed by the dashboard, the CLI and tests.
"""

from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict

class SalesRow(BaseModel):
    """Schema for a cleaned and validated sales transaction.

    Attributes:
        date: Transaction date-time, naive and in local wall-clock time.
        product: Product label (``"Unknown"`` when the record had none).
        units: Quantity sold.
        unit_price: Price per unit.
        sales: Explicit sales amount, or ``units * unit_price`` when the
            record did not carry a usable one.
    """
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)
    date: datetime
    product: str
    units: float
    unit_price: float
    sales: float

class ProductTotal(BaseModel):
    """Lifetime sales for one product and its share of the grand total."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    product: str
    total_sales: float
    percent: float

class MonthlyBucket(BaseModel):
    """Sales and transaction count for one calendar month.

    `pct_change` is ``None`` for the first bucket of a rollup.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    key: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    sales: float
    transactions: int = Field(..., ge=1)
    pct_change: float | None = None

class AggregationResult(BaseModel):
    """Full output of one aggregation call, handed to presentation read-only."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    rows: tuple[SalesRow, ...] = ()
    product_totals: tuple[ProductTotal, ...] = ()
    monthly: tuple[MonthlyBucket, ...] = ()
    naive: float = 0.0
    ma: float = 0.0

class SalesSummary(BaseModel):
    """Headline figures shown above the charts."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    total_sales: float
    product_count: int = Field(..., ge=0)
    record_count: int = Field(..., ge=0)
    naive: float
    ma: float
    last_pct_change: float
