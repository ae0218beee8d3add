from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..models.tables import Base
from .errors import StoreUnavailableError
from .settings import Settings

logger = logging.getLogger(__name__)


def _begin_immediate(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first write, so a transaction that reads
    # then writes can fail with "database is locked" instead of waiting.
    # Taking the write lock at BEGIN makes every transaction wait its turn.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


@dataclass(frozen=True)
class StorageConfig:
    database_url: str
    echo: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(database_url=settings.database_url, echo=settings.db_echo)


class Database:
    """Owns the engine and session factory for one storage configuration.

    Stores receive a ``Database`` in their constructor; nothing is registered
    at module level.
    """

    def __init__(self, config: StorageConfig, *, engine: Engine | None = None) -> None:
        self.config = config
        if engine is None:
            connect_args = {}
            if config.database_url.startswith("sqlite"):
                # Handlers run on the threadpool; a connection may cross threads.
                connect_args = {"check_same_thread": False}
            engine = create_engine(
                config.database_url,
                echo=config.echo,
                connect_args=connect_args,
                pool_pre_ping=True,
            )
            if engine.dialect.name == "sqlite":
                _begin_immediate(engine)
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )

    def create_tables(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreUnavailableError("Error creating tables") from e

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session bound to one transaction: committed on success, rolled back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def reuse_or_open(self, session: Session | None) -> Iterator[Session]:
        # Callers that already hold a transaction pass it through; the owner commits.
        if session is not None:
            yield session
            return
        with self.session() as s:
            yield s

    def dispose(self) -> None:
        self.engine.dispose()


@contextmanager
def store_errors(detail: str) -> Iterator[None]:
    """Re-raise driver/ORM failures as ``StoreUnavailableError`` with ``detail``."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("%s: %s", detail, e, exc_info=True)
        raise StoreUnavailableError(detail) from e
