"""resale_dashboard package.

Contains modules for fetching inventory, sales and event snapshots from
MongoDB, validating them with Pydantic, and aggregating them into the
statistics consumed by the Streamlit dashboard.

Architecture:
- Snapshot (lots, items, sales, events) fetched fresh on every refresh
- Pure aggregation functions turn a snapshot into a `Summary`
- Pydantic models validate both the inputs and the outputs
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
