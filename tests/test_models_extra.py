from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from resale_dashboard.models import (
    EventRecord,
    InventoryLot,
    MonthlyPoint,
    SaleRecord,
    StockItem,
    Summary,
)


def test_sale_accepts_store_column_names() -> None:
    rec = {
        "_id": "65f0c0ffee",
        "id": "sale-1",
        "user_id": "u1",
        "sale_price_total": 120.0,
        "fees": None,
        "sale_date": "2026-02-03",
        "quantity_sold": 2,
        "ticket_lot_id": "lot-9",
        "product_id": None,
        "buyer_name": "Ana",
        "created_at": "2026-02-03T10:15:00Z",
    }
    s = SaleRecord.model_validate(rec)
    assert s.id == "sale-1"
    assert s.sale_total == 120.0
    assert s.fees == 0
    assert s.quantity == 2
    assert s.lot_id == "lot-9"
    assert s.item_id is None
    assert s.sale_date == date(2026, 2, 3)
    assert s.created_at == datetime(2026, 2, 3, 10, 15, tzinfo=timezone.utc)


def test_sale_rejects_two_sources() -> None:
    with pytest.raises(ValidationError):
        SaleRecord.model_validate({
            "id": "s1",
            "sale_price_total": 10,
            "ticket_lot_id": "l1",
            "product_id": "p1",
            "created_at": "2026-02-03T10:15:00Z",
        })


def test_sale_date_parsing() -> None:
    base = {"id": "s1", "created_at": "2026-01-01T00:00:00"}
    assert SaleRecord.model_validate({**base, "sale_date": "2026-05-31T22:00:00-04:00"}).sale_date == date(2026, 5, 31)
    assert SaleRecord.model_validate({**base, "sale_date": datetime(2026, 5, 1, 8)}).sale_date == date(2026, 5, 1)
    assert SaleRecord.model_validate({**base, "sale_date": "31/05/2026"}).sale_date is None
    assert SaleRecord.model_validate(base).sale_date is None


def test_naive_created_at_is_treated_as_utc() -> None:
    e = EventRecord.model_validate({"id": 7, "name": "Derby", "created_at": "2026-03-01T09:00:00"})
    assert e.id == "7"
    assert e.created_at.tzinfo is timezone.utc
    assert e.category is None


def test_lot_aliases_and_coalescing() -> None:
    lot = InventoryLot.model_validate({
        "id": "l1",
        "purchase_price_total": None,
        "status": "listed",
        "event_id": "e1",
        "quantity": None,
    })
    assert lot.purchase_total == 0
    assert lot.owning_event_id == "e1"
    assert lot.quantity == 0


def test_lot_rejects_unknown_status() -> None:
    with pytest.raises(ValidationError):
        InventoryLot.model_validate({"id": "l1", "purchase_price_total": 5, "status": "lost"})


def test_item_keeps_null_purchase_price() -> None:
    item = StockItem.model_validate({"id": "p1", "purchase_price": None, "status": "shipped", "category": "other"})
    assert item.purchase_price is None


def test_monthly_point_month_format() -> None:
    with pytest.raises(ValidationError):
        MonthlyPoint(month="2026-1", revenue=0, costs=0, profit=0)


def test_summary_requires_twelve_months() -> None:
    point = MonthlyPoint(month="2026-10", revenue=0, costs=0, profit=0)
    with pytest.raises(ValidationError):
        Summary(
            total_invested=0,
            total_revenue=0,
            total_profit=0,
            roi_percentage=0,
            tickets_in_stock=0,
            products_in_stock=0,
            monthly_series=[point] * 11,
            category_breakdown=[],
            recent_activity=[],
        )


def test_summary_activity_round_trips_by_kind() -> None:
    point = MonthlyPoint(month="2026-10", revenue=0, costs=0, profit=0)
    s = Summary(
        total_invested=0,
        total_revenue=0,
        total_profit=0,
        roi_percentage=0,
        tickets_in_stock=0,
        products_in_stock=0,
        monthly_series=[point] * 12,
        category_breakdown=[],
        recent_activity=[
            {"kind": "sale", "id": "s1", "description": "Sale", "amount": 5, "created_at": "2026-10-01T00:00:00Z"},
            {"kind": "event_created", "id": "e1", "description": "Event created: X", "created_at": "2026-09-01T00:00:00Z"},
        ],
    )
    kinds = [type(a).__name__ for a in s.recent_activity]
    assert kinds == ["SaleActivity", "EventCreatedActivity"]
    with pytest.raises(ValidationError):
        Summary.model_validate({**s.model_dump(), "recent_activity": [{"kind": "purchase"}]})
