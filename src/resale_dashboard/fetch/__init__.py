"""Snapshot fetching from MongoDB.

Reads the lots, products, sales and events collections and validates every
document before it reaches the aggregation code.
"""
