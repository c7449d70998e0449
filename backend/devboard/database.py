"""Database engine construction and session management."""
from datetime import datetime, timezone
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import DateTime, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool
from sqlalchemy.types import TypeDecorator

from devboard.config import settings
from devboard.utils.logger import logger

Base = declarative_base()


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime on every backend.

    SQLite drops the offset on storage, so values are stored as UTC and the
    offset is attached again on load.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, environment: str = settings.environment) -> Engine:
    """
    Build the SQLAlchemy engine for a database URL.

    Args:
        database_url: SQLAlchemy connection URL
        environment: Deployment environment name

    Returns:
        Configured engine
    """
    echo = environment == "development"

    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}, "echo": echo}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # A single shared connection keeps an in-memory database alive
            options["poolclass"] = StaticPool
        engine = create_engine(database_url, **options)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    # Use NullPool for serverless/pooler connections (e.g. Supabase port 6543)
    if "pooler.supabase.com" in database_url or database_url.endswith(":6543"):
        return create_engine(database_url, poolclass=NullPool, echo=echo)

    return create_engine(
        database_url,
        pool_size=20,
        max_overflow=10,
        pool_pre_ping=True,
        echo=echo,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables known to the ORM metadata."""
    # Register models with the metadata before creating tables
    import devboard.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_connection(engine: Engine) -> bool:
    """Run a trivial query to confirm the database is reachable."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting a request-scoped database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
