import logging
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from config.settings import DATABASE_URL, DEBUG

logger = logging.getLogger(__name__)

engine = create_engine(DATABASE_URL, echo=DEBUG)
SessionLocal = sessionmaker(bind=engine, autoflush=False)
Base = declarative_base()


def init_db(bind=None):
    """Create tables, and the SQLite data directory if needed"""
    bind = bind or engine
    url = bind.url
    if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    # Register models on Base before create_all
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=bind)
    logger.debug("Database ready at %s", url)
