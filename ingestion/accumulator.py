"""
Buffer validated records and commit them to the store in bounded batches
"""

from typing import List
from ingestion.checkpoint import CheckpointStore
from ingestion.loaders.postgres_loader import RecordStore
from ingestion.retry import RetryExecutor
from schemas.client import ClientRecord
import logging

logger = logging.getLogger(__name__)


class BatchAccumulator:
    """
    Batch buffer between validation and the store.

    Ensures:
    - At most batch_size records are held in memory
    - The checkpoint is saved only after the insert call returned
    - A failed insert leaves the buffer untouched
    """

    def __init__(
        self,
        store: RecordStore,
        retry: RetryExecutor,
        checkpoint_store: CheckpointStore,
        batch_size: int = 500
    ):
        self.store = store
        self.retry = retry
        self.checkpoint_store = checkpoint_store
        self.batch_size = batch_size
        self.buffer: List[ClientRecord] = []
        self.batches_committed = 0
        self.rows_committed = 0

    def __len__(self) -> int:
        return len(self.buffer)

    def add(self, record: ClientRecord) -> bool:
        """Append record; True when the batch is full and must be flushed"""
        self.buffer.append(record)
        return len(self.buffer) >= self.batch_size

    async def flush(self, up_to_line: int) -> int:
        """
        Insert the buffered records and advance the checkpoint to up_to_line.

        Returns:
            Number of rows committed (0 when the buffer is empty)

        Raises:
            RetriesExhaustedError: If the insert kept failing
        """
        if not self.buffer:
            return 0

        rows = [record.to_row() for record in self.buffer]
        await self.retry.run(
            lambda: self.store.insert_batch(rows),
            description=f"insert of batch ending at line {up_to_line}"
        )
        self.checkpoint_store.save(up_to_line)

        count = len(rows)
        self.buffer = []
        self.batches_committed += 1
        self.rows_committed += count

        logger.info(f"Batch {self.batches_committed}: Loaded {count} records (checkpoint line {up_to_line})")
        return count
