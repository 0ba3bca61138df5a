"""
Database initialization script
"""
import logging

from tennis_coach.config import load_settings
from tennis_coach.database import Base, create_db_engine, init_database

logger = logging.getLogger(__name__)


def main():
    """Create all tables for the configured database"""
    logging.basicConfig(level=logging.INFO)
    settings = load_settings()
    engine = create_db_engine(settings.database_url)

    logger.info("Initializing database (%s)...", engine.dialect.name)
    init_database(engine)

    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))
    engine.dispose()


if __name__ == "__main__":
    main()
