"""Database service.

The engine is owned by a `Database` object with an explicit lifecycle:
`init()` at startup, `close()` at shutdown. The app keeps it on
`app.state.database`; request handlers get sessions through `get_db`.
"""

import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .settings import DATABASE_URL

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:

    def __init__(self, url: str = DATABASE_URL, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def init(self) -> "Database":
        """Create the engine, the session factory and any missing tables."""
        if self.engine is not None:
            return self

        kwargs = {}
        if self.is_sqlite:
            # Sessions are handed to FastAPI's threadpool.
            kwargs["connect_args"] = {"check_same_thread": False}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every session sees an empty database.
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, echo=self.echo, **kwargs)
        if self.is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        # Register every table on Base before create_all.
        import domain.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database ready ({self.engine.dialect.name})")
        return self

    def session(self) -> Session:
        if self.SessionLocal is None:
            raise RuntimeError("Database.init() has not been called")
        return self.SessionLocal()

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connections closed")
        self.engine = None
        self.SessionLocal = None


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "Database", "get_db"]
