"""
Durable marker of the last input line committed to the store
"""

import json
from pathlib import Path
from core.exceptions import CheckpointError, CheckpointCorruptError
from core.files import atomic_write_json
import logging

logger = logging.getLogger(__name__)

CHECKPOINT_KEY = "last_line"


class CheckpointStore:
    """
    Load and save the last committed line number.

    Design:
    - One small JSON document: {"last_line": <int>}
    - Writes go through a temp file and an atomic rename
    - An absent or unreadable checkpoint means "no progress" (0)
    - The value never moves backwards within one store instance
    """

    def __init__(self, checkpoint_path: str):
        self.path = Path(checkpoint_path)
        self._last_value = 0

    def load(self) -> int:
        """Return the persisted line number, or 0 if there is none"""
        try:
            value = self._read()
        except CheckpointCorruptError as e:
            logger.warning(
                f"Ignoring unreadable checkpoint {self.path}, starting from line 0",
                extra={"error_context": e.to_dict()}
            )
            value = 0

        self._last_value = max(self._last_value, value)
        return value

    def save(self, line: int) -> None:
        """Overwrite the persisted value with line"""
        if line < self._last_value:
            raise CheckpointError(
                "Checkpoint cannot move backwards",
                context={
                    "checkpoint_path": str(self.path),
                    "checkpoint_value": line,
                    "current_value": self._last_value,
                    "operation": "save"
                }
            )

        try:
            atomic_write_json(self.path, {CHECKPOINT_KEY: line})
        except OSError as e:
            raise CheckpointError(
                f"Cannot write checkpoint {self.path}",
                context={
                    "checkpoint_path": str(self.path),
                    "checkpoint_value": line,
                    "operation": "save"
                },
                original_exception=e
            )

        self._last_value = line
        logger.debug(f"Checkpoint saved at line {line}")

    def reset(self) -> None:
        """Delete the persisted checkpoint"""
        if self.path.exists():
            self.path.unlink()
            logger.info(f"Checkpoint {self.path} removed")
        self._last_value = 0

    def _read(self) -> int:
        if not self.path.exists():
            return 0

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            value = data[CHECKPOINT_KEY]
        except (OSError, ValueError, TypeError, KeyError) as e:
            raise CheckpointCorruptError(
                "Checkpoint content is not readable",
                context={"checkpoint_path": str(self.path), "operation": "load"},
                original_exception=e
            )

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise CheckpointCorruptError(
                "Checkpoint value is not a non-negative integer",
                context={
                    "checkpoint_path": str(self.path),
                    "checkpoint_value": value,
                    "operation": "load"
                }
            )
        return value
