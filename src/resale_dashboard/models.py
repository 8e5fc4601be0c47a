"""Pydantic models for store records and dashboard outputs.

Input models validate documents read from the `ticket_lots`, `products`,
`sales` and `events` collections. They accept the store's column names as
aliases and coalesce missing money fields to zero. Output models are frozen
and define the field names the dashboard renderers read.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

LotStatus = Literal["in_stock", "listed", "sold", "transferred", "cancelled"]
ItemStatus = Literal["in_stock", "listed", "sold", "shipped", "returned"]


def _as_id(v: Any) -> Any:
    # Mongo ObjectIds and integer keys are both rendered as strings
    if v is None or isinstance(v, str):
        return v
    return str(v)


def _zero_if_none(v: Any) -> Any:
    return 0 if v is None else v


def _aware(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


# =========================================================
# INPUT RECORDS
# =========================================================

class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        return _as_id(v)


class InventoryLot(_Record):
    """A batch of tickets acquired together for one event."""
    purchase_total: float = Field(
        0.0, validation_alias=AliasChoices("purchase_total", "purchase_price_total")
    )
    status: LotStatus
    owning_event_id: str | None = Field(
        None, validation_alias=AliasChoices("owning_event_id", "event_id")
    )
    quantity: int = 0

    @field_validator("purchase_total", "quantity", mode="before")
    @classmethod
    def coalesce_numbers(cls, v: Any) -> Any:
        return _zero_if_none(v)

    @field_validator("owning_event_id", mode="before")
    @classmethod
    def coerce_event_id(cls, v: Any) -> Any:
        return _as_id(v)


class StockItem(_Record):
    """One physical product unit tracked for resale."""
    purchase_price: float | None = None
    status: ItemStatus
    category: str | None = None


class SaleRecord(_Record):
    """A sale linked to either a ticket lot or a stock item.

    Attributes:
        sale_total: Total price received for the sale.
        fees: Platform fees paid on the sale.
        sale_date: Calendar date of the sale, or None when the stored
            value cannot be parsed.
        quantity: Number of units sold.
        lot_id: Source ticket lot, if the sale is a ticket sale.
        item_id: Source stock item, if the sale is a product sale.
        buyer_name: Optional buyer name shown in the activity feed.
        created_at: When the sale record was created.
    """
    sale_total: float = Field(
        0.0, validation_alias=AliasChoices("sale_total", "sale_price_total")
    )
    fees: float = 0.0
    sale_date: date | None = None
    quantity: int = Field(0, validation_alias=AliasChoices("quantity", "quantity_sold"))
    lot_id: str | None = Field(None, validation_alias=AliasChoices("lot_id", "ticket_lot_id"))
    item_id: str | None = Field(None, validation_alias=AliasChoices("item_id", "product_id"))
    buyer_name: str | None = None
    created_at: datetime

    @field_validator("sale_total", "fees", "quantity", mode="before")
    @classmethod
    def coalesce_numbers(cls, v: Any) -> Any:
        return _zero_if_none(v)

    @field_validator("lot_id", "item_id", mode="before")
    @classmethod
    def coerce_link(cls, v: Any) -> Any:
        return _as_id(v)

    @field_validator("sale_date", mode="before")
    @classmethod
    def parse_sale_date(cls, v: Any) -> date | None:
        """Accept dates, datetimes and ISO strings with or without a time part."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        try:
            return datetime.fromisoformat(str(v).strip()).date()
        except ValueError:
            return None

    @field_validator("created_at")
    @classmethod
    def created_at_aware(cls, v: datetime) -> datetime:
        return _aware(v)

    @model_validator(mode="after")
    def single_source(self) -> SaleRecord:
        if self.lot_id is not None and self.item_id is not None:
            raise ValueError("a sale links to a ticket lot or a stock item, not both")
        return self


class EventRecord(_Record):
    """An event that ticket lots are bought for."""
    name: str
    category: str | None = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_aware(cls, v: datetime) -> datetime:
        return _aware(v)


# =========================================================
# DASHBOARD OUTPUTS
# =========================================================

class MonthlyPoint(BaseModel):
    """Revenue, fees and profit for one calendar month."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    revenue: float
    costs: float
    profit: float


class CategoryRow(BaseModel):
    """Profit and sale count for one resolved category."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    category: str
    profit: float
    count: int = Field(..., ge=0)


class SaleActivity(BaseModel):
    """Activity feed entry for a recorded sale."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: Literal["sale"] = "sale"
    id: str
    description: str
    amount: float
    created_at: datetime


class EventCreatedActivity(BaseModel):
    """Activity feed entry for a newly created event."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    kind: Literal["event_created"] = "event_created"
    id: str
    description: str
    amount: None = None
    created_at: datetime


Activity = Annotated[
    Union[SaleActivity, EventCreatedActivity],
    Field(discriminator="kind"),
]


class Summary(BaseModel):
    """Dashboard statistics derived from one snapshot.

    Attributes:
        total_invested: Lot purchase totals plus item purchase prices.
        total_revenue: Sum of all sale totals.
        total_profit: Revenue minus invested minus fees.
        roi_percentage: Profit over invested, in percent, 2 decimals.
        tickets_in_stock: Number of lots with status `in_stock`.
        products_in_stock: Number of items with status `in_stock`.
        monthly_series: Trailing 12 calendar months, oldest first.
        category_breakdown: One row per category observed among sales.
        recent_activity: Up to 10 newest sale/event activities.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    total_invested: float
    total_revenue: float
    total_profit: float
    roi_percentage: float
    tickets_in_stock: int = Field(..., ge=0)
    products_in_stock: int = Field(..., ge=0)
    monthly_series: list[MonthlyPoint] = Field(..., min_length=12, max_length=12)
    category_breakdown: list[CategoryRow]
    recent_activity: list[Activity] = Field(..., max_length=10)


class EventTotals(BaseModel):
    """Profit and loss for the lots and sales of a single event."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    event_id: str
    total_invested: float
    total_revenue: float
    total_fees: float
    total_profit: float
    roi_percentage: float
    total_tickets: int = Field(..., ge=0)
