"""
Script to load a client register file into the database
"""

import asyncio
import sys
import os
import logging
from typing import List, Optional

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.config import Settings, settings as default_settings
from core.exceptions import ETLException
from core.logging import setup_logging
from ingestion.loaders.postgres_loader import PostgresLoader
from ingestion.runner import ETLRunner
from schemas.pipeline import RunSummary

logger = logging.getLogger(__name__)


async def run_etl(file_path: str, settings: Optional[Settings] = None) -> RunSummary:
    """Run the pipeline for one file with a PostgresLoader"""
    settings = settings or default_settings
    loader = PostgresLoader(settings.DATABASE_URL)

    try:
        runner = ETLRunner(loader, settings.pipeline_config())
        summary = await runner.run(file_path)
        logger.info(
            f"ETL completed for {file_path}: "
            f"Accepted={summary.accepted}, Rejected={summary.rejected}"
        )
        if summary.final_flush_failed:
            logger.error("The final batch was not committed; rerun to load it")
        return summary
    finally:
        await loader.close()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()

    file_path = argv[0] if argv else default_settings.INPUT_FILE
    if not file_path:
        logger.error("Usage: run_etl.py <input-file> (or set INPUT_FILE)")
        return 2

    try:
        asyncio.run(run_etl(file_path))
    except ETLException as e:
        logger.error(f"ETL pipeline error: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
