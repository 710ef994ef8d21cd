"""
Custom exceptions for the client loader pipeline with structured error context.

This module provides the exception hierarchy used throughout the pipeline.
Each exception carries context information for debugging and for the
structured log records emitted by the runner.

Exception Hierarchy:
    ETLException (base)
    ├── ExtractionError
    │   └── FileExtractionError
    ├── TransformationError
    │   └── ValidationError
    ├── LoadError
    │   ├── DatabaseError
    │   │   └── DatabaseConnectionError (retryable, triggers reconnect)
    │   └── RetriesExhaustedError
    ├── CheckpointError
    │   └── CheckpointCorruptError
    ├── ErrorReportWriteError
    └── RetryableError / NonRetryableError (mixins)
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ETLException(Exception):
    """
    Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (file, line, attempt, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/storage."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Retry Strategy Mixins
# ============================================================================

class RetryableError(ETLException):
    """
    Mixin for errors that should trigger retry logic.

    Use this for transient errors like:
    - Dropped or invalidated database connections
    - Temporary network failures
    """
    pass


class NonRetryableError(ETLException):
    """
    Mixin for errors that should NOT trigger retry logic.

    Use this for permanent errors like:
    - Authentication failures
    - Missing tables or schema mismatches
    """
    pass


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(ETLException):
    """Base exception for input read failures."""
    pass


class FileExtractionError(ExtractionError):
    """
    Exception raised when the input file cannot be opened or read.

    Context should include:
        - file_path: Path to the input file
    """
    pass


# ============================================================================
# Transformation Errors
# ============================================================================

class TransformationError(ETLException):
    """Base exception for record transformation failures."""
    pass


class ValidationError(TransformationError):
    """
    Taxonomy slot for per-line validation failures.

    Not raised: RecordValidator reports failures as a Rejected result.
    """
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(ETLException):
    """Base exception for data loading failures."""
    pass


class DatabaseError(LoadError):
    """
    Exception raised when a store operation fails.

    Context should include:
        - operation: Type of database operation (CONNECT, INSERT)
        - table_name: Name of the table
        - rows: Number of rows in the failed batch (if applicable)
    """
    pass


class DatabaseConnectionError(RetryableError, DatabaseError):
    """The store connection is closed or invalidated; reconnect before retrying."""
    pass


class SchemaMismatchError(NonRetryableError, DatabaseError):
    """The destination table is missing or incompatible with the rows."""
    pass


class RetriesExhaustedError(LoadError):
    """
    Exception raised when an operation still fails after the retry budget.

    Context should include:
        - operation: Description of the wrapped operation
        - attempts: Number of attempts performed
    """
    pass


# ============================================================================
# Checkpoint Errors
# ============================================================================

class CheckpointError(ETLException):
    """
    Exception raised when checkpoint management fails.

    Context should include:
        - checkpoint_path: Path of the checkpoint artifact
        - checkpoint_value: The checkpoint value involved
        - operation: Operation that failed (load, save, reset)
    """
    pass


class CheckpointCorruptError(CheckpointError):
    """The checkpoint artifact exists but cannot be interpreted."""
    pass


# ============================================================================
# Error Report Errors
# ============================================================================

class ErrorReportWriteError(ETLException):
    """The rejected-lines report could not be written."""
    pass
