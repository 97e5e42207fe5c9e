"""Caller identity for authenticated endpoints."""
