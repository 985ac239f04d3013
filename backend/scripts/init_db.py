"""
Create the plan tracker tables on the configured database.
Run: python scripts/init_db.py
"""

import logging

from plan_tracker.database import engine, init_db
from plan_tracker.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run():
    setup_logging()
    init_db(engine)
    logger.info("Created tables on %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    run()
