"""SQLite storage handle.

``Storage`` wraps a SQLAlchemy engine bound to the election database file.
It is constructed explicitly, opened once during application startup,
shared by every request through the ``get_storage`` dependency, and
disposed on shutdown.

The three query helpers mirror the shapes the routes need:

* ``all``  -- every row of a SELECT as a list of dicts
* ``get``  -- the first row of a SELECT, or ``None``
* ``run``  -- a write statement, returning the generated id and rows affected

Every SQLAlchemy failure is re-raised as ``StorageError`` (or
``StorageConstraintError`` for integrity violations).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from sqlalchemy import URL, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from election_api.core.errors import StorageConstraintError, StorageError

logger = logging.getLogger(__name__)

Params = Mapping[str, Any]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a write statement."""
    last_id: int | None
    changes: int


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _enable_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    """SQLite only enforces foreign keys when asked to, per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Storage:
    """Process-wide handle to the election SQLite database."""

    def __init__(self, database_path: str, *, echo: bool = False) -> None:
        self.database_path = database_path
        self.echo = echo
        self._engine: Engine | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        """Create the engine and confirm the database file can be read.

        The file is opened read-write without being created, so a wrong
        ``DATABASE_PATH`` fails here instead of on the first request.
        """
        if self._engine is not None:
            return

        url = URL.create(
            "sqlite",
            database=f"file:{self.database_path}",
            query={"mode": "rw", "uri": "true"},
        )
        engine = create_engine(
            url,
            echo=self.echo,
            connect_args={"check_same_thread": False},
        )
        event.listen(engine, "connect", _enable_foreign_keys)

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT count(*) FROM sqlite_master"))
        except SQLAlchemyError as exc:
            engine.dispose()
            logger.error(
                "storage_open_failed",
                extra={
                    "database_path": self.database_path,
                    "error_message": _error_message(exc),
                },
            )
            raise StorageError(
                f"Could not open database at {self.database_path}: {_error_message(exc)}"
            ) from exc

        self._engine = engine
        logger.info(
            "storage_opened",
            extra={"database_path": self.database_path},
        )

    def close(self) -> None:
        """Dispose of the engine and its pooled connections.

        Safe to call when the handle was never opened.
        """
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.info("storage_closed", extra={"database_path": self.database_path})

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageError("Database is not open")
        return self._engine

    def ping(self) -> bool:
        """Return True if a trivial query succeeds."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, StorageError):
            logger.warning("storage_ping_failed", exc_info=True)
            return False
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def all(self, sql: str, params: Params | None = None) -> list[dict[str, Any]]:
        """Run a SELECT and return every row as a dict."""
        try:
            with self.engine.connect() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            raise StorageError(_error_message(exc)) from exc

    def get(self, sql: str, params: Params | None = None) -> dict[str, Any] | None:
        """Run a SELECT and return its first row, or ``None`` when empty."""
        try:
            with self.engine.connect() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                row = result.mappings().first()
        except SQLAlchemyError as exc:
            raise StorageError(_error_message(exc)) from exc
        return dict(row) if row is not None else None

    def run(self, sql: str, params: Params | None = None) -> RunResult:
        """Run a write statement inside its own transaction."""
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                return RunResult(last_id=result.lastrowid, changes=result.rowcount)
        except IntegrityError as exc:
            raise StorageConstraintError(_error_message(exc)) from exc
        except SQLAlchemyError as exc:
            raise StorageError(_error_message(exc)) from exc


def get_storage(request: Request) -> Storage:
    """FastAPI dependency returning the storage handle opened at startup."""
    return request.app.state.storage
