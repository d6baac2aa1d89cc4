"""
Create every table on the configured database.

Usage:
    python initialize_db.py
"""

import logging

from config import ENVIRONMENT, LOG_LEVEL
from core.db import create_tables
from core.logging import configure_logging

logger = logging.getLogger(__name__)


def init_db():
    """Initialize database tables"""
    create_tables()
    logger.info("Database tables created")


if __name__ == "__main__":
    configure_logging(environment=ENVIRONMENT, log_level=LOG_LEVEL)
    init_db()
