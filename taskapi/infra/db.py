import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker

from taskapi.config import SETTINGS

logger = logging.getLogger(__name__)

engine = create_engine(SETTINGS.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def init_db(create_schema: bool = False) -> None:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    if create_schema:
        # Tables are normally owned by the alembic migrations.
        from . import models  # noqa: F401

        Base.metadata.create_all(engine)
        logger.info("Created missing tables on %s", engine.url.render_as_string(hide_password=True))
