"""
Pydantic schemas for data validation and serialization.

Schemas:
    client: ClientRecord, the normalized 7-field record
    pipeline: RawLine, Accepted/Rejected validation results, RejectedLine
              (error report entries) and RunSummary

Usage:
    from schemas.client import ClientRecord
    from schemas.pipeline import Accepted, Rejected, RunSummary
"""

from schemas.client import ClientRecord
from schemas.pipeline import (
    Accepted,
    RawLine,
    Rejected,
    RejectedLine,
    RunSummary,
    ValidationResult,
)

__all__ = [
    "ClientRecord",
    "RawLine",
    "Accepted",
    "Rejected",
    "ValidationResult",
    "RejectedLine",
    "RunSummary",
]
