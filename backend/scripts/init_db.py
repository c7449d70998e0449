"""Create the devboard tables in the configured database.

Run from backend/:
    python -m scripts.init_db

Uses DATABASE_URL from the environment (or .env). Safe to re-run: existing
tables are left untouched.
"""

import sys

from devboard.config import settings
from devboard.database import check_connection, create_db_engine, init_db
from devboard.utils.logger import logger


def main() -> int:
    logger.info("Starting database initialization...")
    engine = create_db_engine(settings.database_url)
    try:
        if not check_connection(engine):
            logger.error("Database initialization failed: database is unreachable")
            return 1

        init_db(engine)
        logger.info("Database initialized successfully")
        return 0
    finally:
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
