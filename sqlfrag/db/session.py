from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.sql import TextClause

from ..sql.params import to_named_params

Params = Mapping[str, Any] | Sequence[Any] | None


def _prepare(sql: str | TextClause, params: Params) -> tuple[TextClause, Mapping[str, Any]]:
    """
    Turn ``sql`` and ``params`` into a text clause plus named binds.

    A list or tuple of values is treated as positional: ``sql`` must then be
    a string using ``$1`` .. ``$N`` placeholders.
    """
    if params is None or isinstance(params, Mapping):
        stmt = text(sql) if isinstance(sql, str) else sql
        return stmt, params or {}

    if not isinstance(params, (list, tuple)):
        raise TypeError(
            f"params must be a mapping or a list/tuple of values, got {type(params).__name__}"
        )
    if not isinstance(sql, str):
        raise TypeError("Positional values require a plain SQL string with $N placeholders")

    named_sql, named = to_named_params(sql, params)
    return text(named_sql), named


class DbSession:
    """
    Transactional wrapper around a SQLAlchemy Engine connection.

    Use as:
        with DbSession(engine) as session:
            session.execute("UPDATE jobs SET salary = :salary WHERE id = :id", {...})
            row = session.fetch_one("SELECT * FROM jobs WHERE id = $1", [42])
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._conn: Connection | None = None
        self._tx = None

    def __enter__(self) -> "DbSession":
        if self._conn is not None:
            raise RuntimeError("DbSession is already active; nested sessions are not allowed")
        self._conn = self.engine.connect()
        self._tx = self._conn.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._tx is not None:
                if exc_type:
                    self._tx.rollback()
                else:
                    self._tx.commit()
        finally:
            if self._conn is not None:
                self._conn.close()

            self._conn = None
            self._tx = None

        # propagate exceptions (if any)
        return False

    def _connection(self) -> Connection:
        if self._conn is None:
            raise RuntimeError("DbSession is not active; use within a context manager")
        return self._conn

    def execute(self, sql: str | TextClause, params: Params = None) -> int:
        """
        Execute a non-SELECT statement and return affected row count.
        """
        conn = self._connection()
        stmt, bound = _prepare(sql, params)
        result = conn.execute(stmt, bound)
        if result.rowcount is None:
            raise RuntimeError(
                "execute() received None rowcount for statement. "
                "This may indicate a DDL statement or unsupported operation type."
            )
        return int(result.rowcount)

    def fetch_one(self, sql: str | TextClause, params: Params = None) -> dict[str, Any] | None:
        """
        Execute a statement expected to return 0 or 1 row. Raises if more than one row.

        Also used for INSERT/UPDATE/DELETE ... RETURNING.
        """
        conn = self._connection()
        stmt, bound = _prepare(sql, params)
        result = conn.execute(stmt, bound)
        row = result.mappings().one_or_none()
        if row is None:
            return None
        return dict(row)

    def fetch_all(self, sql: str | TextClause, params: Params = None) -> list[dict[str, Any]]:
        """
        Execute a SELECT expected to return multiple rows.
        """
        conn = self._connection()
        stmt, bound = _prepare(sql, params)
        result = conn.execute(stmt, bound)
        return [dict(row) for row in result.mappings()]
