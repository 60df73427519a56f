"""
Create tables and seed defaults (bootstrap admin, starter form, service catalog).
Run from project root:
  python -m app.scripts.init_db
Existing rows are kept; only empty tables are seeded.
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal, engine
from app.core.logging import configure_logging
from app.services.seed import init_db

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    db = SessionLocal()
    try:
        inserted = init_db(engine, db, settings)
        logger.info("Database initialization completed: %s", inserted)
        return 0
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
