"""Load a validated dashboard snapshot from MongoDB.

Module notes:
- Every refresh reads all four collections; nothing is cached.
- Documents failing Pydantic validation are skipped and counted.
- Store errors abort the whole snapshot; aggregation never sees partial data.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError
from pymongo.errors import PyMongoError

from resale_dashboard.config import Settings
from resale_dashboard.db import get_client, get_db
from resale_dashboard.models import EventRecord, InventoryLot, SaleRecord, StockItem

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

LOTS_PROJECTION = {"id": 1, "purchase_price_total": 1, "status": 1, "event_id": 1, "quantity": 1}
PRODUCTS_PROJECTION = {"id": 1, "purchase_price": 1, "status": 1, "category": 1}
SALES_PROJECTION = {
    "id": 1,
    "sale_price_total": 1,
    "fees": 1,
    "sale_date": 1,
    "quantity_sold": 1,
    "ticket_lot_id": 1,
    "product_id": 1,
    "buyer_name": 1,
    "created_at": 1,
}
EVENTS_PROJECTION = {"id": 1, "name": 1, "category": 1, "created_at": 1}


class SnapshotFetchError(RuntimeError):
    """Raised when a collection cannot be read from the store."""


@dataclass(frozen=True)
class Snapshot:
    """One consistent read of the four collections the dashboard needs.

    Attributes:
        lots: Ticket lots.
        items: Stock items (products).
        sales: Sale records.
        events: The most recently created events, newest first.
    """
    lots: tuple[InventoryLot, ...]
    items: tuple[StockItem, ...]
    sales: tuple[SaleRecord, ...]
    events: tuple[EventRecord, ...]


def _validate_docs(docs: Iterable[dict[str, Any]], model: type[M], name: str) -> list[M]:
    """Validate raw documents, skipping and counting the bad ones.

    Args:
        docs: Raw Mongo documents.
        model: Pydantic model to validate against.
        name: Collection name used in log messages.

    Returns:
        The validated records.
    """
    good: list[M] = []
    bad = 0

    for doc in docs:
        try:
            good.append(model.model_validate(doc))
        except ValidationError as e:
            bad += 1
            log.warning("Skipping invalid %s document %s: %s", name, doc.get("_id"), e)

    log.info("Loaded %s: good=%d bad=%d", name, len(good), bad)
    return good


def load_snapshot(db: Any, recent_events_limit: int = 10) -> Snapshot:
    """Read and validate every collection the dashboard aggregates.

    Args:
        db: PyMongo Database (or any object exposing collections by key).
        recent_events_limit: How many of the newest events to fetch.

    Returns:
        A `Snapshot` of validated records.

    Raises:
        SnapshotFetchError: if any collection read fails.
    """
    try:
        lot_docs = list(db["ticket_lots"].find({}, LOTS_PROJECTION))
        product_docs = list(db["products"].find({}, PRODUCTS_PROJECTION))
        sale_docs = list(db["sales"].find({}, SALES_PROJECTION))
        event_docs = list(
            db["events"]
            .find({}, EVENTS_PROJECTION)
            .sort("created_at", -1)
            .limit(recent_events_limit)
        )
    except PyMongoError as e:
        raise SnapshotFetchError(f"Unable to read dashboard collections: {e}") from e

    return Snapshot(
        lots=tuple(_validate_docs(lot_docs, InventoryLot, "ticket_lots")),
        items=tuple(_validate_docs(product_docs, StockItem, "products")),
        sales=tuple(_validate_docs(sale_docs, SaleRecord, "sales")),
        events=tuple(_validate_docs(event_docs, EventRecord, "events")),
    )


def fetch_snapshot(settings: Settings) -> Snapshot:
    """Open a client from `settings`, load a snapshot and close the client.

    Raises:
        SnapshotFetchError: if the client cannot be created (bad URI, SRV
            lookup failure) or any collection read fails.
    """
    try:
        client = get_client(settings.mongo_uri)
    except (PyMongoError, ValueError) as e:
        raise SnapshotFetchError(f"Unable to connect to MongoDB: {e}") from e

    try:
        db = get_db(client, settings.mongo_db)
        return load_snapshot(db, settings.recent_events_limit)
    finally:
        client.close()
