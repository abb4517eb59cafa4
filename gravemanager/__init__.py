"""Persistence services for Body and Grave records (SQLite)."""
