from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from flightwatch.config import get_settings
import logging
import os

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(db_url: str) -> Engine:
    """Build an engine for ``db_url``.

    SQLite needs foreign keys switched on per connection, otherwise
    ON DELETE CASCADE and FK checks are silently ignored.
    """
    if not db_url.startswith("sqlite"):
        return create_engine(db_url, pool_pre_ping=True)

    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False}
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


settings = get_settings()
engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    """Create any missing tables. Used for SQLite; Postgres goes through Alembic."""
    # Models must be imported so their tables are registered on Base.metadata
    import flightwatch.models

    db_path = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and db_path and db_path != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)

    Base.metadata.create_all(bind=bind)
    logger.info(f"Ensured {len(Base.metadata.sorted_tables)} tables exist")
