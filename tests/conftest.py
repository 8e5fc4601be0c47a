from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from resale_dashboard.models import EventRecord, InventoryLot, SaleRecord, StockItem

AS_OF = date(2026, 10, 19)


def ts(day: int, hour: int = 12, month: int = 10, year: int = 2026) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def make_lot(id: str, purchase_total: float = 0.0, status: str = "in_stock",
             event_id: str | None = None, quantity: int = 0) -> InventoryLot:
    return InventoryLot(
        id=id,
        purchase_total=purchase_total,
        status=status,
        owning_event_id=event_id,
        quantity=quantity,
    )


def make_item(id: str, purchase_price: float | None = None, status: str = "in_stock",
              category: str | None = "sneakers") -> StockItem:
    return StockItem(id=id, purchase_price=purchase_price, status=status, category=category)


def make_sale(id: str, sale_total: float, fees: float = 0.0, sale_date: str = "2026-10-05",
              lot_id: str | None = None, item_id: str | None = None,
              buyer_name: str | None = None, created_at: datetime | None = None) -> SaleRecord:
    return SaleRecord(
        id=id,
        sale_total=sale_total,
        fees=fees,
        sale_date=sale_date,
        quantity=1,
        lot_id=lot_id,
        item_id=item_id,
        buyer_name=buyer_name,
        created_at=created_at or ts(5),
    )


def make_event(id: str, name: str = "Concert", category: str | None = "concert",
               created_at: datetime | None = None) -> EventRecord:
    return EventRecord(id=id, name=name, category=category, created_at=created_at or ts(1))


@pytest.fixture
def as_of() -> date:
    return AS_OF
