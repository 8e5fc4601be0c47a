from __future__ import annotations

import pandas as pd
import streamlit as st
import altair as alt

from resale_dashboard.config import get_settings
from resale_dashboard.fetch.load_snapshot import SnapshotFetchError, fetch_snapshot
from resale_dashboard.aggregate.stats import compute_summary
from resale_dashboard.aggregate.event_totals import compute_event_totals
from resale_dashboard.formatting import format_currency

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Resale Dashboard", layout="wide")
st.title("📊 Resale Dashboard")

# =====================================================
# Snapshot (fresh on every rerun)
# =====================================================
try:
    settings = get_settings()
except RuntimeError as exc:
    st.error(str(exc))
    st.stop()

try:
    snapshot = fetch_snapshot(settings)
except SnapshotFetchError as exc:  # pragma: no cover - runtime failure handling
    st.error(f"Unable to load dashboard data: {exc}")
    st.stop()

summary = compute_summary(snapshot.lots, snapshot.items, snapshot.sales, snapshot.events)
currency = settings.currency

# =====================================================
# Helpers
# =====================================================
def kpi(label: str, value, delta: str | None = None) -> None:
    """Display a simple KPI metric in the dashboard.

    Args:
        label: Metric label.
        value: Metric value (displayed as-is).
        delta: Optional trend shown under the value.
    """
    st.metric(label, value, delta=delta)

# =====================================================
# SECTION 0 — KPIs
# =====================================================
st.header("📌 Overview")

c1, c2, c3, c4, c5, c6 = st.columns(6)
with c1:
    kpi("Total Invested", format_currency(summary.total_invested, currency))
with c2:
    kpi("Total Revenue", format_currency(summary.total_revenue, currency))
with c3:
    kpi(
        "Total Profit",
        format_currency(summary.total_profit, currency),
        delta=f"{summary.roi_percentage:.1f}%" if summary.total_invested > 0 else None,
    )
with c4:
    kpi("ROI", f"{summary.roi_percentage:.1f}%")
with c5:
    kpi("Ticket Lots in Stock", summary.tickets_in_stock)
with c6:
    kpi("Products in Stock", summary.products_in_stock)

st.divider()

# =====================================================
# SECTION 1 — MONTHLY P&L
# =====================================================
st.header("📈 Monthly P&L (last 12 months)")

df_monthly = pd.DataFrame([p.model_dump() for p in summary.monthly_series])
df_long = df_monthly.melt(
    id_vars="month",
    value_vars=["revenue", "costs", "profit"],
    var_name="measure",
    value_name="amount",
)

chart_monthly = (
    alt.Chart(df_long)
    .mark_bar()
    .encode(
        x=alt.X("month:O", title="Month"),
        xOffset="measure:N",
        y=alt.Y("amount:Q", title=f"Amount ({currency})"),
        color=alt.Color("measure:N", title=None),
        tooltip=["month:O", "measure:N", alt.Tooltip("amount:Q", format=",.2f")],
    )
    .properties(height=320)
)
st.altair_chart(chart_monthly, width="stretch")

st.divider()

# =====================================================
# SECTION 2 — PROFIT BY CATEGORY
# =====================================================
st.header("🏷️ Profit by Category")

if not summary.category_breakdown:
    st.info("No sales recorded yet.")
else:
    df_cat = pd.DataFrame([r.model_dump() for r in summary.category_breakdown])
    chart_cat = (
        alt.Chart(df_cat)
        .mark_bar()
        .encode(
            x=alt.X("category:N", sort=alt.SortField("profit", order="descending"), title=None),
            y=alt.Y("profit:Q", title=f"Profit ({currency})"),
            tooltip=["category:N", alt.Tooltip("profit:Q", format=",.2f"), "count:Q"],
        )
        .properties(height=320)
    )
    st.altair_chart(chart_cat, width="stretch")

st.divider()

# =====================================================
# SECTION 3 — RECENT ACTIVITY
# =====================================================
st.header("🕒 Recent Activity")

if not summary.recent_activity:
    st.info("No recent activity.")
else:
    df_activity = pd.DataFrame(
        [
            {
                "when": a.created_at.strftime("%Y-%m-%d %H:%M"),
                "activity": a.description,
                "amount": format_currency(a.amount, currency) if a.amount is not None else "",
            }
            for a in summary.recent_activity
        ]
    )
    st.dataframe(df_activity, width="stretch", hide_index=True)

st.divider()

# =====================================================
# SECTION 4 — EVENT P&L
# =====================================================
st.header("🎫 Event P&L")

if not snapshot.events:
    st.info("No events available.")
else:
    names = {e.id: e.name for e in snapshot.events}
    event_id = st.selectbox("Event", list(names), format_func=names.get)
    totals = compute_event_totals(event_id, snapshot.lots, snapshot.sales)

    e1, e2, e3, e4 = st.columns(4)
    with e1:
        kpi("Invested", format_currency(totals.total_invested, currency))
    with e2:
        kpi("Revenue", format_currency(totals.total_revenue, currency))
    with e3:
        kpi("Profit", format_currency(totals.total_profit, currency), delta=f"{totals.roi_percentage:.1f}%")
    with e4:
        kpi("Tickets", totals.total_tickets)
