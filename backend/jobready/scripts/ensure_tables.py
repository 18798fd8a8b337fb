"""
Create any JobReady tables missing from DATABASE_URL. Existing tables and rows are left alone.

Usage:
  python -m jobready.scripts.ensure_tables
"""
import logging

from jobready.database import ensure_tables_exist
from jobready.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main():
    setup_logging()
    ensure_tables_exist()
    logger.info("Schema check complete")


if __name__ == "__main__":
    main()
