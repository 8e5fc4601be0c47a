"""Per-event profit and loss shown on the event detail view."""

from __future__ import annotations

import logging
from typing import Sequence

from resale_dashboard.formatting import calculate_roi
from resale_dashboard.models import EventTotals, InventoryLot, SaleRecord

log = logging.getLogger(__name__)


def compute_event_totals(
    event_id: str,
    lots: Sequence[InventoryLot],
    sales: Sequence[SaleRecord],
) -> EventTotals:
    """Return invested, revenue, fees, profit and ROI for one event.

    Only lots owned by `event_id` are counted, and only sales made from
    those lots.

    Args:
        event_id: Event whose lots are totalled.
        lots: Ticket lots (any event; filtered here).
        sales: Sale records (any source; filtered here).

    Returns:
        `EventTotals` where ROI is measured on revenue net of fees.
    """
    event_lots = [lot for lot in lots if lot.owning_event_id == event_id]
    lot_ids = {lot.id for lot in event_lots}
    event_sales = [s for s in sales if s.lot_id in lot_ids]

    if not event_lots:
        log.warning("No ticket lots found for event %s", event_id)

    invested = float(sum(lot.purchase_total for lot in event_lots))
    revenue = float(sum(s.sale_total for s in event_sales))
    fees = float(sum(s.fees for s in event_sales))

    return EventTotals(
        event_id=event_id,
        total_invested=invested,
        total_revenue=revenue,
        total_fees=fees,
        total_profit=revenue - fees - invested,
        roi_percentage=round(calculate_roi(invested, revenue - fees), 2),
        total_tickets=sum(lot.quantity for lot in event_lots),
    )
