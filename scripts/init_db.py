"""Create the database schema for the configured DATABASE_URL.

Usage: python scripts/init_db.py
"""

import logging

from cookai.config import get_settings
from cookai.database import init_db

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)


if __name__ == "__main__":
    init_db()
    logger.info("Database tables created")
