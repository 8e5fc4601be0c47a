"""Dashboard aggregation helpers.

This package contains the pure routines that turn a fetched snapshot of
lots, items, sales and events into dashboard statistics (KPI totals, the
monthly P&L series, profit by category, recent activity) and into per-event
profit and loss.
"""
