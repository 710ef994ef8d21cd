# ============================================================================
# File: ingestion/runner.py
# Description: Streaming client file loader with checkpointed batch commits
# ============================================================================
"""
ETL Runner - Orchestrates read, validate, batch and commit for one file.

This module provides the pipeline entry point with:
- Resume from the last committed line (checkpoint)
- Per-line validation that never aborts the run
- Bounded batches committed with retry and reconnect
- An error report of every rejected line
- Strict or lenient handling of the trailing partial batch
"""

from contextlib import closing
from pathlib import Path
from typing import Optional
import logging

from core.config import PipelineConfig
from core.exceptions import ETLException, ErrorReportWriteError, RetriesExhaustedError
from ingestion.accumulator import BatchAccumulator
from ingestion.checkpoint import CheckpointStore
from ingestion.error_sink import ErrorSink
from ingestion.extractors.line_source import LineSource
from ingestion.loaders.postgres_loader import RecordStore
from ingestion.retry import RetryExecutor
from ingestion.transformers.validator import RecordValidator
from schemas.pipeline import Accepted, RunSummary

logger = logging.getLogger(__name__)


class ETLRunner:
    """
    Client file ingestion orchestrator

    Responsibilities:
    - Init: optional checkpoint reset, checkpoint load, connect with retries
    - Streaming: skip committed lines, validate, route, flush full batches
    - Finalize: flush the partial batch, persist the error report
    - Abort: a failed connect or full-batch flush propagates; the last
      saved checkpoint stays authoritative for the next run
    """

    def __init__(
        self,
        store: RecordStore,
        config: Optional[PipelineConfig] = None,
        checkpoint_store: Optional[CheckpointStore] = None,
        error_sink: Optional[ErrorSink] = None,
        validator: Optional[RecordValidator] = None,
        retry: Optional[RetryExecutor] = None
    ):
        self.store = store
        self.config = config or PipelineConfig()
        self.checkpoint_store = checkpoint_store or CheckpointStore(self.config.checkpoint_path)
        self.error_sink = error_sink or ErrorSink(self.config.error_report_path)
        self.validator = validator or RecordValidator()
        self.retry = retry or RetryExecutor(
            max_retries=self.config.max_retries,
            reconnect=self.store.connect,
            backoff_seconds=self.config.retry_backoff_seconds
        )

    async def run(self, file_path: str) -> RunSummary:
        """
        Load one file into the store.

        Returns:
            RunSummary with accepted/rejected counts for the lines past the
            start checkpoint

        Raises:
            FileExtractionError: If the input file cannot be opened
            RetriesExhaustedError: If connecting or a full-batch insert kept
                failing, or the trailing insert failed in strict mode
            ErrorReportWriteError: If the error report cannot be written
        """
        # --------------------------------------------------
        # INIT
        # --------------------------------------------------
        if self.config.reset_checkpoint_on_start:
            logger.warning("Resetting checkpoint before run")
            self.checkpoint_store.reset()

        start_checkpoint = self.checkpoint_store.load()
        summary = RunSummary(start_checkpoint=start_checkpoint, checkpoint=start_checkpoint)

        logger.info(f"Starting load of {file_path} (checkpoint: line {start_checkpoint})")

        try:
            await self.retry.run(self.store.connect, description="connect")
        except RetriesExhaustedError as e:
            logger.error(f"Could not connect to store: {e.message}", extra={"error_context": e.to_dict()})
            raise

        accumulator = BatchAccumulator(
            store=self.store,
            retry=self.retry,
            checkpoint_store=self.checkpoint_store,
            batch_size=self.config.batch_size
        )

        # --------------------------------------------------
        # STREAMING
        # --------------------------------------------------
        last_line = 0
        source = LineSource(file_path, encoding=self.config.input_encoding)

        try:
            with closing(source.lines()) as lines:
                for raw in lines:
                    last_line = raw.line_number
                    if raw.line_number <= start_checkpoint:
                        summary.skipped += 1
                        continue

                    result = self.validator.validate(raw.content)

                    if isinstance(result, Accepted):
                        summary.accepted += 1
                        if accumulator.add(result.record):
                            await accumulator.flush(raw.line_number)
                            summary.checkpoint = raw.line_number
                    else:
                        summary.rejected += 1
                        self.error_sink.record(raw.line_number, raw.content, result.reasons)

        except ETLException as e:
            logger.error(
                f"Load aborted at line {last_line}: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            raise

        if last_line < start_checkpoint:
            logger.warning(
                f"Checkpoint (line {start_checkpoint}) is beyond the end of {file_path} ({last_line} lines)"
            )

        # --------------------------------------------------
        # FINALIZE
        # --------------------------------------------------
        final_error: Optional[RetriesExhaustedError] = None
        try:
            if await accumulator.flush(last_line):
                summary.checkpoint = last_line
        except RetriesExhaustedError as e:
            summary.final_flush_failed = True
            logger.error(
                f"Final batch of {len(accumulator)} records could not be inserted: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            if self.config.finalize_mode == "strict":
                final_error = e

        summary.batches_committed = accumulator.batches_committed

        try:
            if len(self.error_sink) > 0:
                summary.error_report_path = str(self.error_sink.persist())
        except ErrorReportWriteError as e:
            if final_error is None:
                raise
            logger.error(
                f"Error report could not be written: {e.message}",
                extra={"error_context": e.to_dict()}
            )

        if final_error is not None:
            raise final_error

        logger.info(
            f"Load completed for {Path(file_path).name}: "
            f"Accepted={summary.accepted}, Rejected={summary.rejected}, "
            f"Skipped={summary.skipped}, Batches={summary.batches_committed}, "
            f"Checkpoint={summary.checkpoint}"
        )
        return summary


async def process_file(
    file_path: str,
    store: RecordStore,
    config: Optional[PipelineConfig] = None
) -> RunSummary:
    """Run the pipeline once for file_path against store"""
    return await ETLRunner(store, config).run(file_path)
