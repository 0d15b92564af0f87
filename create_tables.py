# create_tables.py
"""
Create (or recreate with --drop) the users and tasks tables for DATABASE_URL
"""

import argparse
import logging

from casetasks.config import Settings
from casetasks.database import Database
from casetasks.logging_setup import setup_logging

logger = logging.getLogger("create_tables")


def create_tables(database: Database, drop: bool = False) -> None:
    """Create all tables, dropping the existing ones first if asked"""
    if drop:
        database.drop_all()
        logger.info("Dropped existing tables")
    database.create_all()
    logger.info("All tables created successfully")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    database = Database.from_settings(settings)
    try:
        create_tables(database, drop=args.drop)
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
