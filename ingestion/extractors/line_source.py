"""
Sequential line reader for the pipe-delimited client file
"""

from pathlib import Path
from typing import Iterator
from core.exceptions import FileExtractionError
from schemas.pipeline import RawLine
import logging

logger = logging.getLogger(__name__)

BOM = "\ufeff"


class LineSource:
    """
    Lazy, forward-only stream of RawLine over a text file.

    Supports:
    - Files of any size (one line in memory at a time)
    - Any line terminator convention (\\n, \\r\\n, \\r)
    - A fresh iteration always starts again at line 1
    - A leading byte order mark is not part of line 1
    """

    def __init__(self, file_path: str, encoding: str = "utf-8"):
        self.file_path = Path(file_path)
        self.encoding = encoding

    def __iter__(self) -> Iterator[RawLine]:
        return self.lines()

    def lines(self) -> Iterator[RawLine]:
        try:
            infile = self.file_path.open("r", encoding=self.encoding, errors="replace", newline=None)
        except OSError as e:
            raise FileExtractionError(
                f"Cannot open input file {self.file_path}",
                context={"file_path": str(self.file_path)},
                original_exception=e
            )

        logger.info(f"Reading lines from {self.file_path}")

        with infile:
            line_number = 0
            for line in infile:
                line_number += 1
                if line_number == 1:
                    line = line.lstrip(BOM)
                yield RawLine(line_number=line_number, content=line.rstrip("\n"))

        logger.info(f"Read {line_number} lines from {self.file_path}")
