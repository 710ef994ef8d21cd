"""
Pydantic schemas for lines flowing through the pipeline and the run summary
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union
from schemas.client import ClientRecord


class RawLine(BaseModel):
    """One input line and its 1-based position in the file"""

    line_number: int = Field(..., ge=1)
    content: str


class Accepted(BaseModel):
    kind: Literal["accepted"] = "accepted"
    record: ClientRecord


class Rejected(BaseModel):
    kind: Literal["rejected"] = "rejected"
    reasons: List[str] = Field(..., min_length=1)


ValidationResult = Union[Accepted, Rejected]


class RejectedLine(BaseModel):
    """Entry of the error report"""

    line_number: int = Field(..., ge=1)
    content: str
    reasons: List[str] = Field(..., min_length=1)


class RunSummary(BaseModel):
    """
    Outcome of one pipeline run.

    accepted + rejected always equals the number of lines past the start
    checkpoint. final_flush_failed is set when the trailing partial batch
    could not be committed in lenient mode; those records are counted as
    accepted but are not in the store.
    """

    accepted: int = 0
    rejected: int = 0
    skipped: int = 0
    start_checkpoint: int = 0
    checkpoint: int = 0
    batches_committed: int = 0
    final_flush_failed: bool = False
    error_report_path: Optional[str] = None
