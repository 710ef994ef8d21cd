"""
Collect rejected lines and write the error report at the end of a run
"""

from pathlib import Path
from typing import List
from core.exceptions import ErrorReportWriteError
from core.files import atomic_write_json
from schemas.pipeline import RejectedLine
import logging

logger = logging.getLogger(__name__)


class ErrorSink:
    """
    In-memory list of rejected lines, persisted once as a JSON array.

    The list grows with the whole run; it is the only structure not
    bounded by the batch size.
    """

    def __init__(self, report_path: str):
        self.report_path = Path(report_path)
        self.rejected: List[RejectedLine] = []

    def __len__(self) -> int:
        return len(self.rejected)

    def record(self, line_number: int, content: str, reasons: List[str]) -> RejectedLine:
        rejected = RejectedLine(line_number=line_number, content=content, reasons=reasons)
        self.rejected.append(rejected)
        logger.debug(f"Line {line_number} rejected: {'; '.join(reasons)}")
        return rejected

    def persist(self) -> Path:
        """Write every recorded line, in input order, to the report path"""
        payload = [rejected.model_dump() for rejected in self.rejected]
        try:
            atomic_write_json(self.report_path, payload, indent=2)
        except OSError as e:
            raise ErrorReportWriteError(
                f"Cannot write error report {self.report_path}",
                context={"report_path": str(self.report_path), "rejected": len(payload)},
                original_exception=e
            )

        logger.warning(f"Recorded {len(payload)} rejected lines in {self.report_path}")
        return self.report_path
