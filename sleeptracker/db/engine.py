"""
Database handle for the sleep history table.

`SleepDatabase` owns the engine and the session factory. The app builds one at
startup and passes it around; `get_instance()` is the lazily-built,
process-wide accessor for code that has no handle injected.
"""
from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sleeptracker.config import SLEEP_DATABASE_URL, SLEEP_SQL_ECHO
from sleeptracker.db.base import Base
import sleeptracker.db.models  # noqa: F401  registers the tables on Base.metadata

logger = logging.getLogger(__name__)


class SleepDatabase:
    def __init__(self, url: str = SLEEP_DATABASE_URL, echo: bool = SLEEP_SQL_ECHO):
        self.url = url
        engine_kwargs = {"echo": echo}

        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            # the executor thread is not the thread that opened the connection
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if parsed.database in (None, "", ":memory:"):
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        logger.info("Opened sleep database at %s", parsed.render_as_string(hide_password=True))

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


_instance: Optional[SleepDatabase] = None
_instance_lock = threading.Lock()


def get_instance(url: Optional[str] = None) -> SleepDatabase:
    """
    Return the process-wide database, building it (and its table) on first use.
    `url` only matters for the call that builds it.
    """
    global _instance
    with _instance_lock:
        if _instance is None:
            instance = SleepDatabase(url or SLEEP_DATABASE_URL)
            instance.create_tables()
            _instance = instance
        return _instance


def reset_instance() -> None:
    global _instance
    with _instance_lock:
        if _instance is not None:
            _instance.dispose()
        _instance = None
