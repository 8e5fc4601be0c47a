"""Dashboard statistics aggregation.

Functions in this module turn one snapshot of lots, items, sales and events
into the `Summary` shown on the dashboard. They are pure: nothing is read
from or written to the store, and the only clock input is the `as_of` date
that anchors the trailing 12-month window.

Expectations:
- Input: validated `InventoryLot`, `StockItem`, `SaleRecord` and
  `EventRecord` lists (see `resale_dashboard.models`).
- Output: a frozen `Summary`; sub-results are documented on each helper.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Sequence

import pandas as pd

from resale_dashboard.models import (
    Activity,
    CategoryRow,
    EventCreatedActivity,
    EventRecord,
    InventoryLot,
    MonthlyPoint,
    SaleActivity,
    SaleRecord,
    StockItem,
    Summary,
)

UNCATEGORIZED = "other"
MONTHS_IN_SERIES = 12
RECENT_ACTIVITY_LIMIT = 10

_SALE_COLUMNS = ["id", "sale_total", "fees", "sale_date", "lot_id", "item_id"]


def _frame(records: Sequence[Any], columns: list[str]) -> pd.DataFrame:
    """Build a DataFrame from models, keeping the columns when empty."""
    return pd.DataFrame(
        [r.model_dump(include=set(columns)) for r in records],
        columns=columns,
    )


def _plain_sum(col: pd.Series) -> float:
    # same addition as compute_totals so a single month matches the totals
    return float(sum(col.tolist()))


def _as_of_date(now: date | datetime | None) -> date:
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


# =========================================================
# TOTALS
# =========================================================

def compute_totals(
    lots: Sequence[InventoryLot],
    items: Sequence[StockItem],
    sales: Sequence[SaleRecord],
) -> dict[str, float]:
    """Return invested, revenue, fees, profit and ROI for a snapshot.

    Args:
        lots: Ticket lots; `purchase_total` counts as invested.
        items: Stock items; a null `purchase_price` counts as zero.
        sales: Sale records supplying revenue and fees.

    Returns:
        Dict with keys `total_invested`, `total_revenue`, `total_fees`,
        `total_profit` and `roi_percentage` (2 decimals, 0 when nothing
        was invested).
    """
    lot_invested = sum(lot.purchase_total for lot in lots)
    item_invested = sum(item.purchase_price or 0.0 for item in items)
    total_invested = float(lot_invested + item_invested)

    total_revenue = float(sum(s.sale_total for s in sales))
    total_fees = float(sum(s.fees for s in sales))
    total_profit = total_revenue - total_invested - total_fees

    if total_invested > 0:
        roi = round(total_profit / total_invested * 100, 2)
    else:
        roi = 0.0

    return {
        "total_invested": total_invested,
        "total_revenue": total_revenue,
        "total_fees": total_fees,
        "total_profit": total_profit,
        "roi_percentage": roi,
    }


def count_in_stock(records: Sequence[InventoryLot] | Sequence[StockItem]) -> int:
    """Return how many records currently have status `in_stock`."""
    return sum(1 for r in records if r.status == "in_stock")


# =========================================================
# MONTHLY SERIES
# =========================================================

def build_monthly_series(
    sales: Sequence[SaleRecord],
    as_of: date,
    months: int = MONTHS_IN_SERIES,
) -> list[MonthlyPoint]:
    """Return revenue, fees and profit per month for the trailing window.

    Sales are assigned to the calendar month containing their `sale_date`.
    Sales without a parsed date, or dated outside the window, are left out.

    Args:
        sales: Sale records.
        as_of: Any day in the last month of the window.
        months: Window length (default 12).

    Returns:
        `months` points, oldest first; empty months carry zeros.
    """
    last = pd.Period(pd.Timestamp(as_of), freq="M")
    window = pd.period_range(end=last, periods=months, freq="M")

    df = _frame(sales, _SALE_COLUMNS).dropna(subset=["sale_date"])
    df = df.assign(month=pd.to_datetime(df["sale_date"]).dt.to_period("M"))

    monthly = (
        df.groupby("month")[["sale_total", "fees"]]
        .agg(_plain_sum)
        .reindex(window, fill_value=0.0)
    )

    points = []
    for period, row in monthly.iterrows():
        revenue = float(row["sale_total"])
        costs = float(row["fees"])
        points.append(
            MonthlyPoint(
                month=period.strftime("%Y-%m"),
                revenue=revenue,
                costs=costs,
                profit=revenue - costs,
            )
        )
    return points


# =========================================================
# CATEGORY BREAKDOWN
# =========================================================

def resolve_category(
    sale: SaleRecord,
    item_categories: dict[str, str | None],
    lot_events: dict[str, str | None],
    event_categories: dict[str, str | None],
) -> str:
    """Return the category a sale belongs to.

    Product sales take the item's category; ticket sales take the category
    of the event that owns the lot. Anything unresolved is `UNCATEGORIZED`.
    """
    category: str | None = None
    if sale.item_id:
        category = item_categories.get(sale.item_id)
    elif sale.lot_id:
        event_id = lot_events.get(sale.lot_id)
        if event_id is not None:
            category = event_categories.get(event_id)
    return category or UNCATEGORIZED


def build_category_breakdown(
    sales: Sequence[SaleRecord],
    lots: Sequence[InventoryLot],
    items: Sequence[StockItem],
    events: Sequence[EventRecord],
) -> list[CategoryRow]:
    """Return profit (sale total minus fees) and sale count per category.

    Returns:
        One `CategoryRow` per category observed among the sales, in the
        order each category is first seen; profit rounded to 2 decimals.
    """
    if not sales:
        return []

    item_categories = {i.id: i.category for i in items}
    lot_events = {lot.id: lot.owning_event_id for lot in lots}
    event_categories = {e.id: e.category for e in events}

    df = _frame(sales, _SALE_COLUMNS)
    df["category"] = [
        resolve_category(s, item_categories, lot_events, event_categories)
        for s in sales
    ]
    df["profit"] = df["sale_total"] - df["fees"]

    grouped = (
        df.groupby("category", sort=False)
        .agg(profit=("profit", "sum"), count=("id", "size"))
        .reset_index()
    )

    return [
        CategoryRow(
            category=row["category"],
            profit=round(float(row["profit"]), 2),
            count=int(row["count"]),
        )
        for row in grouped.to_dict("records")
    ]


# =========================================================
# RECENT ACTIVITY
# =========================================================

def _sale_description(sale: SaleRecord) -> str:
    if sale.buyer_name:
        return f"Sale to {sale.buyer_name}"
    return "Sale"


def build_recent_activity(
    sales: Sequence[SaleRecord],
    events: Sequence[EventRecord],
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[Activity]:
    """Merge the newest sales with the supplied events into one feed.

    The `limit` newest sales are taken first, every supplied event is added,
    and the merged list is sorted newest first and cut to `limit`. Events are
    expected to be pre-limited by the loader, so an older sale can push out
    an event that was never fetched.
    """
    recent_sales = sorted(sales, key=lambda s: s.created_at, reverse=True)[:limit]

    activities: list[Activity] = [
        SaleActivity(
            id=s.id,
            description=_sale_description(s),
            amount=s.sale_total,
            created_at=s.created_at,
        )
        for s in recent_sales
    ]
    activities.extend(
        EventCreatedActivity(
            id=e.id,
            description=f"Event created: {e.name}",
            created_at=e.created_at,
        )
        for e in events
    )

    # list.sort is stable; ties keep sales ahead of events
    activities.sort(key=lambda a: a.created_at, reverse=True)
    return activities[:limit]


# =========================================================
# SUMMARY
# =========================================================

def compute_summary(
    lots: Sequence[InventoryLot],
    items: Sequence[StockItem],
    sales: Sequence[SaleRecord],
    events: Sequence[EventRecord],
    now: date | datetime | None = None,
) -> Summary:
    """Aggregate a snapshot into the dashboard `Summary`.

    Args:
        lots: Ticket lots.
        items: Stock items.
        sales: Sale records linked to lots or items.
        events: Events owning the lots; also feed the activity list.
        now: Reference time for the monthly window (defaults to today).

    Returns:
        A new frozen `Summary`. Nothing is cached between calls.
    """
    as_of = _as_of_date(now)
    totals = compute_totals(lots, items, sales)

    return Summary(
        total_invested=totals["total_invested"],
        total_revenue=totals["total_revenue"],
        total_profit=totals["total_profit"],
        roi_percentage=totals["roi_percentage"],
        tickets_in_stock=count_in_stock(lots),
        products_in_stock=count_in_stock(items),
        monthly_series=build_monthly_series(sales, as_of),
        category_breakdown=build_category_breakdown(sales, lots, items, events),
        recent_activity=build_recent_activity(sales, events),
    )
