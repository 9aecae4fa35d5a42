"""
Data access layer.

A ``Store`` owns one SQLAlchemy engine (and therefore one driver-managed
connection pool) and runs parameterized SQL through short-lived sessions.
Handlers never see SQLAlchemy exceptions: every failure comes out as a
``StoreError`` subclass chained to the driver error.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.sql.expression import Executable

from errors import StoreConnectionError, StoreQueryError
from logger import get_logger
from models import Base

logger = get_logger(__name__)

Statement = Union[str, Executable]


@dataclass(frozen=True)
class WriteResult:
    rowcount: int
    lastrowid: Optional[int] = None


def _as_clause(statement: Statement) -> Executable:
    if isinstance(statement, str):
        return text(statement)
    return statement


class Store:
    """Runs one statement per session against the configured database."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine)

    @classmethod
    def from_settings(cls, settings) -> "Store":
        engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
        return cls(engine)

    @contextmanager
    def _session(self):
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Query failed: {e}", exc_info=True)
            raise StoreQueryError(str(e)) from e
        finally:
            db.close()

    def fetch_all(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> list[dict]:
        """
        Execute a read and return every row as a dict keyed by column name.

        Raises:
            StoreQueryError: If the driver rejects the statement.
        """
        with self._session() as db:
            result = db.execute(_as_clause(statement), dict(params or {}))
            return [dict(row._mapping) for row in result]

    def execute(self, statement: Statement, params: Optional[Mapping[str, Any]] = None) -> WriteResult:
        """
        Execute a write and commit it.

        Returns:
            The affected-row count and, for inserts, the generated identifier.

        Raises:
            StoreQueryError: If the driver rejects the statement.
        """
        with self._session() as db:
            result = db.execute(_as_clause(statement), dict(params or {}))
            return WriteResult(rowcount=result.rowcount, lastrowid=result.lastrowid)

    def ping(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Error al conectar a la base de datos: {e}")
            raise StoreConnectionError(str(e)) from e

    def create_tables(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize schema: {e}")
            raise StoreConnectionError(str(e)) from e
        logger.info("Database schema initialized.")

    def dispose(self) -> None:
        self.engine.dispose()


# ================== SHARED HANDLE ==================
_store: Optional[Store] = None


def init_store(settings) -> Store:
    """Build the process-wide store once; later calls return the same one."""
    global _store
    if _store is None:
        _store = Store.from_settings(settings)
        logger.info(f"Store initialized for {_store.engine.url.render_as_string(hide_password=True)}")
    return _store


def get_store() -> Store:
    if _store is None:
        raise StoreConnectionError("Store not initialized. Call init_store() first.")
    return _store


def close_store() -> None:
    global _store
    if _store is not None:
        _store.dispose()
        _store = None
        logger.info("Store closed.")
