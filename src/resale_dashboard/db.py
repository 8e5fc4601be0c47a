"""MongoDB helpers.

Centralizes creation of Mongo clients and database handles used by the
snapshot loader, the CLI and the Streamlit app.
"""

from __future__ import annotations

from typing import Any
from pymongo import MongoClient
from pymongo.database import Database

import certifi


def get_client(uri: str, tls: bool | None = None) -> MongoClient[dict[str, Any]]:
    """Return a configured PyMongo MongoClient for the provided URI.

    Args:
        uri: MongoDB connection URI.
        tls: Force TLS on or off. Defaults to on for `mongodb+srv://` URIs
            (Atlas) and off otherwise.

    Returns:
        Configured MongoClient instance.
    """
    if tls is None:
        tls = uri.startswith("mongodb+srv://")

    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": 30000,
        "socketTimeoutMS": 30000,
        "connectTimeoutMS": 30000,
    }
    if tls:
        options["tls"] = True
        options["tlsCAFile"] = certifi.where()

    return MongoClient(uri, **options)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient.

    Args:
        client: PyMongo MongoClient.
        db_name: Database name.

    Returns:
        A Database object.
    """
    return client[db_name]
