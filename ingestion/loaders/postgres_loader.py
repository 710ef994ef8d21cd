"""
Append client rows into PostgreSQL in bulk
"""

from typing import Optional, Protocol, Sequence
from sqlalchemy import insert, text
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, ProgrammingError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from core.config import settings
from core.database import build_engine, build_session_maker
from core.exceptions import DatabaseConnectionError, DatabaseError, SchemaMismatchError
from models.client import Client
from schemas.client import COLUMNS
import logging

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    """Store capability used by the pipeline"""

    async def connect(self) -> None:
        """Establish or re-establish the session; safe to call repeatedly"""
        ...

    async def insert_batch(self, rows: Sequence[Sequence[str]]) -> None:
        """
        Append rows in order.

        Must raise DatabaseConnectionError when the connection is closed so
        the caller can reconnect, and DatabaseError for other failures.
        """
        ...


class PostgresLoader:
    """
    RecordStore backed by SQLAlchemy async and asyncpg.

    Ensures:
    - Each batch is one transaction (all rows or none)
    - Closed or invalidated connections surface as DatabaseConnectionError
    - A missing table surfaces as a non-retryable SchemaMismatchError
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.DATABASE_URL
        self.engine: Optional[AsyncEngine] = None
        self.session_maker = None

    async def connect(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()

        self.engine = build_engine(self.database_url)
        self.session_maker = build_session_maker(self.engine)

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            raise self._translate(e, operation="CONNECT")

        logger.info("Connected to destination database")

    async def insert_batch(self, rows: Sequence[Sequence[str]]) -> None:
        if not rows:
            return

        if self.session_maker is None:
            raise DatabaseConnectionError(
                "Loader is not connected",
                context={"operation": "INSERT", "table_name": Client.__tablename__}
            )

        mappings = [dict(zip(COLUMNS, row)) for row in rows]

        try:
            async with self.session_maker() as session:
                await session.execute(insert(Client), mappings)
                await session.commit()
        except Exception as e:
            raise self._translate(e, operation="INSERT", rows=len(mappings))

        logger.debug(f"Inserted {len(mappings)} rows into {Client.__tablename__}")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_maker = None

    @staticmethod
    def _translate(error: Exception, operation: str, rows: int = 0) -> DatabaseError:
        """Map driver/SQLAlchemy failures onto the pipeline's error classes"""
        context = {"operation": operation, "table_name": Client.__tablename__}
        if rows:
            context["rows"] = rows

        if isinstance(error, DatabaseError):
            return error

        if (
            isinstance(error, (InterfaceError, OperationalError, ConnectionError, OSError))
            or (isinstance(error, DBAPIError) and error.connection_invalidated)
        ):
            return DatabaseConnectionError(
                "Database connection closed", context=context, original_exception=error
            )

        if isinstance(error, ProgrammingError):
            return SchemaMismatchError(
                "Destination table missing or incompatible", context=context, original_exception=error
            )

        if isinstance(error, SQLAlchemyError):
            return DatabaseError(
                f"Database {operation} failed", context=context, original_exception=error
            )

        return DatabaseError(
            f"Unexpected error during {operation}", context=context, original_exception=error
        )
