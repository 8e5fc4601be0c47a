"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the environment (including a check that `MONGO_URI` is present).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

@dataclass(frozen=True)
class Settings:
    """Container for dashboard configuration read from the environment.

    Attributes:
        mongo_uri: MongoDB connection URI.
        mongo_db: Database holding the lots, products, sales and events.
        recent_events_limit: How many of the newest events feed the activity list.
        currency: ISO currency code used when formatting money.
        log_path: File receiving log output in addition to stdout.
    """
    mongo_uri: str
    mongo_db: str
    recent_events_limit: int
    currency: str
    log_path: Path



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `MONGO_URI` is not set in the environment.
    """
    mongo_uri = os.getenv("MONGO_URI", "").strip()
    mongo_db = os.getenv("MONGO_DB", "resale")
    recent_events_limit = int(os.getenv("RECENT_EVENTS_LIMIT", "10"))
    currency = os.getenv("DASHBOARD_CURRENCY", "EUR").strip().upper()
    log_path = Path(os.getenv("LOG_PATH", "logs/dashboard.log"))

    if not mongo_uri:
        raise RuntimeError(
            "MONGO_URI is required. Set it in .env "
            "(example: 'mongodb://localhost:27017')."
        )

    return Settings(
        mongo_uri=mongo_uri,
        mongo_db=mongo_db,
        recent_events_limit=recent_events_limit,
        currency=currency,
        log_path=log_path,
    )
