from __future__ import annotations

import logging

import altair as alt
import streamlit as st

from salespulse.config import get_settings
from salespulse.ingest.parse_csv import IngestionError
from salespulse.logging_config import configure_logging
from salespulse.summary import (
    aggregate_upload,
    format_money,
    format_pct,
    monthly_frame,
    product_totals_frame,
    summarize,
)

log = logging.getLogger("salespulse.dashboard")

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="SalesPulse – CSV Dashboard", layout="wide")
st.title("📊 SalesPulse – CSV Dashboard")
st.caption("Upload a CSV → top products, monthly trend, quick forecast baselines.")

try:
    settings = get_settings()
except RuntimeError as exc:
    st.error(str(exc))
    st.stop()

configure_logging(settings.log_path, settings.log_level)

# =====================================================
# Helpers
# =====================================================
def kpi(label: str, value) -> None:
    """Display a simple KPI metric in the dashboard.

    Args:
        label: Metric label.
        value: Metric value (displayed as-is).
    """
    st.metric(label, value)

# =====================================================
# SECTION 0 — UPLOAD
# =====================================================
upload = st.file_uploader("Upload sales CSV", type=["csv"])

if upload is None:
    st.info("Drop a CSV with date, product, units/quantity, price and/or sales/revenue columns.")
    st.stop()

try:
    data = upload.getvalue()
    log.info("Aggregating upload %s (%d bytes)", upload.name, len(data))
    result = aggregate_upload(data, settings)
except IngestionError as exc:
    st.error(f"Error: {exc}")
    st.stop()

if not result.rows:
    st.warning("No valid rows found. Check that the file has parseable dates and numeric amounts.")
    st.stop()

summary = summarize(result)

# =====================================================
# SECTION 1 — OVERVIEW
# =====================================================
c1, c2, c3 = st.columns(3)
with c1:
    kpi("Total Sales", format_money(summary.total_sales))
with c2:
    kpi("Products", summary.product_count)
with c3:
    kpi("Records", summary.record_count)

st.divider()

# =====================================================
# SECTION 2 — CHARTS
# =====================================================
left, right = st.columns(2)

with left:
    st.subheader("🏆 Top Products")
    df_products = product_totals_frame(result)
    chart_products = (
        alt.Chart(df_products)
        .mark_bar()
        .encode(
            x=alt.X("product:N", sort=alt.SortField("total_sales", order="descending"), title=None),
            y=alt.Y("total_sales:Q", title="Total Sales ($)"),
            tooltip=[
                "product:N",
                alt.Tooltip("total_sales:Q", format=",.2f"),
                alt.Tooltip("percent:Q", format=".2f"),
            ],
        )
        .properties(height=320)
    )
    st.altair_chart(chart_products, width="stretch")

with right:
    st.subheader("📈 Monthly Trend")
    df_monthly = monthly_frame(result)
    chart_monthly = (
        alt.Chart(df_monthly)
        .mark_line(point=True)
        .encode(
            x=alt.X("key:O", title="Month"),
            y=alt.Y("sales:Q", title="Monthly Sales ($)"),
            tooltip=[
                "key:O",
                alt.Tooltip("sales:Q", format=",.2f"),
                "transactions:Q",
                alt.Tooltip("pct_change:Q", format=".2f"),
            ],
        )
        .properties(height=320)
    )
    st.altair_chart(chart_monthly, width="stretch")

st.divider()

# =====================================================
# SECTION 3 — BASELINES
# =====================================================
b1, b2, b3 = st.columns(3)
with b1:
    kpi("Naive (last month)", format_money(summary.naive))
with b2:
    kpi(f"MA({settings.ma_window}) average", format_money(summary.ma))
with b3:
    kpi("Monthly % change (last)", format_pct(summary.last_pct_change))
