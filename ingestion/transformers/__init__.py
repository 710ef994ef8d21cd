"""Line validation and normalization."""

from ingestion.transformers.validator import RecordValidator

__all__ = ["RecordValidator"]
