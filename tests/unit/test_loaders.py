"""
Unit tests for the PostgreSQL loader
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, ProgrammingError
from core.exceptions import DatabaseConnectionError, DatabaseError, SchemaMismatchError
from ingestion.loaders.postgres_loader import PostgresLoader
from schemas.client import ClientRecord

ROWS = [
    ("Ana", "Lopez", "1", "ACTIVE", "01/02/2020", "true", "false"),
    ("Juan", "Perez", "2", "ACTIVE", "1/2/2021", "false", "false"),
]


def make_engine():
    engine = MagicMock()
    engine.dispose = AsyncMock()
    conn = AsyncMock()
    engine.connect.return_value.__aenter__.return_value = conn
    return engine, conn


def make_session_maker():
    session = AsyncMock()
    session_maker = MagicMock()
    session_maker.return_value.__aenter__.return_value = session
    return session_maker, session


@pytest.fixture
def patched_db():
    engine, conn = make_engine()
    session_maker, session = make_session_maker()
    with patch("ingestion.loaders.postgres_loader.build_engine", return_value=engine) as build_engine, \
            patch("ingestion.loaders.postgres_loader.build_session_maker", return_value=session_maker):
        yield {
            "build_engine": build_engine,
            "engine": engine,
            "conn": conn,
            "session": session,
        }


class TestPostgresLoader:
    """Test PostgreSQL loader functionality"""

    @pytest.mark.asyncio
    async def test_connect_checks_connection(self, patched_db):
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")

        await loader.connect()

        patched_db["build_engine"].assert_called_once_with("postgresql+asyncpg://u:p@db/test")
        patched_db["conn"].execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reconnect_disposes_previous_engine(self, patched_db):
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")

        await loader.connect()
        await loader.connect()

        patched_db["engine"].dispose.assert_awaited_once()
        assert patched_db["build_engine"].call_count == 2

    @pytest.mark.asyncio
    async def test_connect_failure_is_connection_error(self, patched_db):
        patched_db["conn"].execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await loader.connect()

        assert exc_info.value.context["operation"] == "CONNECT"

    @pytest.mark.asyncio
    async def test_insert_batch_single_transaction(self, patched_db):
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")
        await loader.connect()

        await loader.insert_batch(ROWS)

        session = patched_db["session"]
        session.execute.assert_awaited_once()
        mappings = session.execute.await_args.args[1]
        assert mappings[0] == {
            "first_name": "Ana",
            "last_name": "Lopez",
            "national_id": "1",
            "status": "ACTIVE",
            "admission_date": "01/02/2020",
            "is_pep": "true",
            "is_regulated_subject": "false",
        }
        assert len(mappings) == 2
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_maps_record_rows_by_column(self, patched_db):
        record = ClientRecord(
            first_name="Maria",
            last_name="Gomez",
            national_id="33333333",
            status="INACTIVE",
            admission_date="15/06/2019",
            is_pep="false",
            is_regulated_subject="true",
        )
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")
        await loader.connect()

        await loader.insert_batch([record.to_row()])

        mappings = patched_db["session"].execute.await_args.args[1]
        assert mappings == [record.model_dump()]

    @pytest.mark.asyncio
    async def test_insert_empty_batch(self, patched_db):
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")
        await loader.connect()

        await loader.insert_batch([])

        patched_db["session"].execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_before_connect(self):
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")

        with pytest.raises(DatabaseConnectionError):
            await loader.insert_batch(ROWS)

    @pytest.mark.asyncio
    async def test_invalidated_connection_is_connection_error(self, patched_db):
        patched_db["session"].execute.side_effect = DBAPIError(
            "INSERT", {}, Exception("connection is closed"), connection_invalidated=True
        )
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")
        await loader.connect()

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await loader.insert_batch(ROWS)

        assert exc_info.value.context["rows"] == 2

    @pytest.mark.asyncio
    async def test_missing_table_is_schema_error(self, patched_db):
        patched_db["session"].execute.side_effect = ProgrammingError(
            "INSERT", {}, Exception('relation "clients" does not exist')
        )
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")
        await loader.connect()

        with pytest.raises(SchemaMismatchError):
            await loader.insert_batch(ROWS)

    @pytest.mark.asyncio
    async def test_other_failures_are_database_errors(self, patched_db):
        patched_db["session"].execute.side_effect = IntegrityError("INSERT", {}, Exception("check"))
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")
        await loader.connect()

        with pytest.raises(DatabaseError) as exc_info:
            await loader.insert_batch(ROWS)

        assert not isinstance(exc_info.value, DatabaseConnectionError)

    @pytest.mark.asyncio
    async def test_close_disposes_engine(self, patched_db):
        loader = PostgresLoader("postgresql+asyncpg://u:p@db/test")
        await loader.connect()

        await loader.close()

        patched_db["engine"].dispose.assert_awaited_once()
        assert loader.engine is None
