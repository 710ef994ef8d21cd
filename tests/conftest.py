"""
Pytest configuration and fixtures
"""

import pytest
from typing import List, Optional, Sequence
from core.config import PipelineConfig

VALID_LINE = "Ana|Lopez|12345678|ACTIVE|01/02/2020|true|false"


class FakeStore:
    """
    In-memory RecordStore.

    connect_failures / insert_failures are consumed in order; a None entry
    in insert_failures lets that call succeed.
    """

    def __init__(
        self,
        connect_failures: Optional[List[Exception]] = None,
        insert_failures: Optional[List[Optional[Exception]]] = None
    ):
        self.connect_failures = list(connect_failures or [])
        self.insert_failures = list(insert_failures or [])
        self.connect_calls = 0
        self.insert_calls = 0
        self.batches: List[List[tuple]] = []

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.connect_failures:
            raise self.connect_failures.pop(0)

    async def insert_batch(self, rows: Sequence[Sequence[str]]) -> None:
        self.insert_calls += 1
        if self.insert_failures:
            error = self.insert_failures.pop(0)
            if error is not None:
                raise error
        self.batches.append([tuple(row) for row in rows])

    @property
    def rows(self) -> List[tuple]:
        return [row for batch in self.batches for row in batch]


@pytest.fixture
def store_factory():
    """Build FakeStore instances"""
    return FakeStore


@pytest.fixture
def pipeline_config(tmp_path) -> PipelineConfig:
    """Pipeline options writing artifacts under tmp_path, without backoff delays"""
    return PipelineConfig(
        checkpoint_path=str(tmp_path / "checkpoint.json"),
        error_report_path=str(tmp_path / "errors.json"),
        batch_size=3,
        max_retries=3,
        retry_backoff_seconds=0,
    )


@pytest.fixture
def write_input(tmp_path):
    """Write lines to an input file and return its path"""
    def _write(lines: List[str], name: str = "clients.dat", newline: str = "\n") -> str:
        path = tmp_path / name
        path.write_bytes(newline.join(lines).encode("utf-8") + newline.encode("utf-8"))
        return str(path)

    return _write


@pytest.fixture
def valid_line() -> str:
    return VALID_LINE


@pytest.fixture
def mixed_lines() -> List[str]:
    """Seven lines: five valid, two rejected (lines 3 and 6)"""
    return [
        "Ana|Lopez|11111111|ACTIVE|01/02/2020|true|false",
        "Juan|Perez|22222222|ACTIVE|1/2/2021|false|false",
        "Bad|Line|only-three",
        "Maria|Gomez|33333333|INACTIVE|15/06/2019|false|true",
        "Luis|Diaz|44444444|ACTIVE|30/11/2018|true|true",
        "Eva|Ruiz|55555555|ACTIVE|31/13/2020|true|false",
        "Sofia|Martin|66666666|ACTIVE|05/05/2005|false|false",
    ]
