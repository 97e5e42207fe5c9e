"""Hotspot aggregation services."""
