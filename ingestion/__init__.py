"""
Streaming pipeline for loading the client register file.

This package contains every stage between the input file and the store:

Modules:
    runner: ETLRunner orchestrator and the process_file entry point
    accumulator: Bounded batch buffer with checkpointed flush
    checkpoint: Durable last-committed-line marker
    error_sink: Rejected line collection and error report
    retry: Retry with quadratic backoff and reconnect

Subpackages:
    extractors: LineSource over the input file
    transformers: RecordValidator (repair, checks, truncation)
    loaders: RecordStore contract and PostgresLoader

Architecture:
    Init -> Streaming -> Finalize -> Done

    1. Init - Load the checkpoint and connect to the store with retries
    2. Streaming - Skip committed lines, validate the rest, flush full batches
    3. Finalize - Flush the partial batch, write the error report

    A line is never reprocessed once its batch has been committed and the
    checkpoint saved. A crash between insert and checkpoint save replays
    one batch on the next run.

Usage:
    from ingestion.runner import ETLRunner, process_file
    from ingestion.loaders.postgres_loader import PostgresLoader

Example:
    loader = PostgresLoader()
    summary = await process_file("CLIENTES_IN_0425.dat", loader, settings.pipeline_config())

    print(f"Accepted {summary.accepted}, rejected {summary.rejected}")
"""

__all__ = [
    "ETLRunner",
    "process_file",
    "BatchAccumulator",
    "CheckpointStore",
    "ErrorSink",
    "RetryExecutor",
    "LineSource",
    "RecordValidator",
    "PostgresLoader",
    "RecordStore",
]
