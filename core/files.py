"""
Atomic JSON file writes
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def atomic_write_json(path: Path, payload: Any, indent: int = None) -> None:
    """
    Write payload as JSON so that path is either fully replaced or untouched.

    The data goes to a temp file in the destination directory first and is
    then moved over the target with os.replace.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as outfile:
            json.dump(payload, outfile, indent=indent, ensure_ascii=False)
            outfile.write("\n")
            outfile.flush()
            os.fsync(outfile.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
