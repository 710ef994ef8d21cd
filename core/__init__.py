"""
Core utilities and configuration for the client loader.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application settings and explicit pipeline options
    database: Async engine and session factories
    exceptions: Custom exception hierarchy for error handling
    files: Atomic JSON writes for the checkpoint and error report
    logging: Logging configuration

Usage:
    from core.config import settings, PipelineConfig
    from core.exceptions import DatabaseConnectionError, RetriesExhaustedError
    from core.logging import setup_logging

Example:
    setup_logging()
    config = settings.pipeline_config()
"""

__all__ = [
    "settings",
    "PipelineConfig",
    "setup_logging",
    # Exceptions
    "ETLException",
    "ExtractionError",
    "FileExtractionError",
    "TransformationError",
    "ValidationError",
    "LoadError",
    "DatabaseError",
    "DatabaseConnectionError",
    "SchemaMismatchError",
    "RetriesExhaustedError",
    "CheckpointError",
    "CheckpointCorruptError",
    "ErrorReportWriteError",
    "RetryableError",
    "NonRetryableError",
]
