"""SQLAlchemy storage for the welcome endpoint's request records."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String, create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from codepulse.errors import StorageError

LOGGER = logging.getLogger(__name__)

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RequestRecord(Base):
    __tablename__ = "reqs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, default="anonymous")
    remote_address = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


def create_db_engine(database_url: str) -> Engine:
    """Build an engine; SQLite files get their parent directory created."""

    engine_kwargs = {"pool_pre_ping": True}
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, **engine_kwargs)


def init_db(engine: Engine) -> None:
    """Create tables that do not exist yet."""

    Base.metadata.create_all(bind=engine)
    LOGGER.info("database tables ready")


class RequestStore:
    """Writes one row per welcomed request."""

    def __init__(self, engine: Engine) -> None:
        self._sessions = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def record(self, name: str, remote_address: str) -> int:
        """Insert a request record and return its id."""

        record = RequestRecord(name=name, remote_address=remote_address)
        try:
            with self._sessions() as session, session.begin():
                session.add(record)
        except SQLAlchemyError as exc:
            LOGGER.error("insert failed", extra={"detail": str(exc)})
            raise StorageError("Unable to record request.") from exc
        return record.id

    def count(self, remote_address: Optional[str] = None) -> int:
        """Return the number of stored records, optionally for one address."""

        with self._sessions() as session:
            query = session.query(RequestRecord)
            if remote_address is not None:
                query = query.filter(RequestRecord.remote_address == remote_address)
            return query.count()
