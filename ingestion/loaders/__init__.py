"""Destination store implementations."""

from ingestion.loaders.postgres_loader import PostgresLoader, RecordStore

__all__ = ["PostgresLoader", "RecordStore"]
