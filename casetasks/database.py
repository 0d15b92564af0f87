# casetasks/database.py
import logging
from datetime import datetime, timezone
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from casetasks.errors import InternalError

logger = logging.getLogger(__name__)

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every datetime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Database:
    """Owns the engine and session factory for one database URL."""

    def __init__(self, url: str, sslmode: Optional[str] = None):
        if url.lower().startswith("sqlite"):
            connect_args = {"check_same_thread": False}
        elif sslmode:
            connect_args = {"sslmode": sslmode}
        else:
            connect_args = {}

        self.url = url
        self.engine = create_engine(url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(settings.database_url, sslmode=settings.database_sslmode)

    def create_all(self) -> None:
        # models must be imported so their tables are registered on Base
        from casetasks import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        from casetasks import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Iterator[Session]:
        db: Session = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency: one session per request from the app's database."""
    database: Database = request.app.state.database
    yield from database.session()


def commit(db: Session, failure_message: str) -> None:
    """Commit, rolling back and raising InternalError if the store rejects it."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        raise InternalError(failure_message)
