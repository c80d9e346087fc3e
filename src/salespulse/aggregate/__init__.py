"""Aggregation helpers.

This package turns cleaned sales rows into the datasets shown on the
dashboard: per-product totals, the monthly rollup and the forecast
baselines.
"""

from salespulse.aggregate.build import aggregate

__all__ = ["aggregate"]
