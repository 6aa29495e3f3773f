"""
Initialize the database and create all tables.
"""
import logging

import config
from db.database import init_database
from logging_config import setup_logging

logger = logging.getLogger(__name__)

if __name__ == '__main__':
    setup_logging(config.LOG_FORMAT, config.LOG_LEVEL)
    logger.info("Creating database tables...")
    init_database()
    logger.info("Database initialized successfully at: %s", config.DATABASE_URL)
