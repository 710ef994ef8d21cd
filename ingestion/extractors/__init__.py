"""Input readers."""

from ingestion.extractors.line_source import LineSource

__all__ = ["LineSource"]
