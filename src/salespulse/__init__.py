"""salespulse package.

Turns an uploaded CSV of sales records into dashboard-ready statistics:
cleaned and typed rows, per-product totals with share of the grand total,
a monthly rollup with month-over-month change, and two naive forecast
baselines.

Architecture:
- Ingest → Clean → Aggregate, recomputed from scratch for every file
- pandas handles CSV parsing and the grouped rollups
- Pydantic models describe the immutable aggregation result
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
