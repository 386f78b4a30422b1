from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy.engine import Engine

from .metrics import observe_db_query
from .session import DbSession
from ..config import DbConfig
from ..errors import NotFoundError
from ..sql.columns import ColumnMapper
from ..sql.entities import JOB_COLUMNS, JOB_FILTERS
from ..sql.filters import FilterCompiler

logger = logging.getLogger(__name__)

_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'


class JobRepository:
    """
    Data access for jobs.

    Every method runs in its own DbSession (one transaction per call) and
    returns rows as ``{id, title, salary, equity, companyHandle}`` dicts.

    Usage:
        jobs = JobRepository(engine)
        job = jobs.create("Engineer", 120000, "0.01", "acme")
        jobs.find_all({"minSalary": 100000, "hasEquity": "true"})
        jobs.update(job["id"], {"salary": 130000})
    """

    def __init__(self, engine: Engine, config: DbConfig | None = None) -> None:
        self.engine = engine
        self.config = config or DbConfig(table_name="jobs")
        self._filters = FilterCompiler(JOB_FILTERS)
        self._columns = ColumnMapper(JOB_COLUMNS)

    @property
    def table(self) -> str:
        return self.config.table_name

    @contextmanager
    def _session(self, op_type: str) -> Iterator[DbSession]:
        start_time = time.monotonic()
        status = "success"
        try:
            with DbSession(self.engine) as session:
                yield session
        except Exception:
            status = "error"
            raise
        finally:
            latency = time.monotonic() - start_time
            observe_db_query(self.table, op_type, status, latency)

    def create(self, title: str, salary: Any, equity: Any, company_handle: str) -> dict[str, Any]:
        """Insert a job and return it."""
        sql = (
            f"INSERT INTO {self.table} (title, salary, equity, company_handle) "
            f"VALUES ($1, $2, $3, $4) "
            f"RETURNING {_RETURNING}"
        )
        with self._session("insert") as session:
            return session.fetch_one(sql, [title, salary, equity, company_handle])

    def find_all(
        self,
        criteria: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Return jobs matching ``criteria``, ordered by title.

        Recognized criteria:
        - title: case-insensitive substring of the title
        - minSalary: salary greater than or equal
        - hasEquity: "true" for equity > 0, anything else for no equity

        Other keys are ignored. No criteria returns every job.
        """
        fragment = self._filters.compile(criteria)
        sql = (
            f"SELECT {_RETURNING} FROM {self.table} "
            f"{fragment.where()} "
            f"ORDER BY title"
        )
        logger.debug("find_all on %s with %d bound value(s)", self.table, len(fragment.values))
        with self._session("select") as session:
            return session.fetch_all(sql, fragment.values)

    def get(self, id_value: Any) -> dict[str, Any]:
        """
        Return the job with ``id_value``.

        Raises NotFoundError if there is no such job.
        """
        sql = f"SELECT {_RETURNING} FROM {self.table} WHERE {self.config.id_column} = $1"
        with self._session("select") as session:
            job = session.fetch_one(sql, [id_value])

        if job is None:
            raise NotFoundError(f"No job with id: {id_value}")
        return job

    def update(
        self,
        id_value: Any,
        data: Mapping[str, Any] | Iterable[tuple[str, Any]],
    ) -> dict[str, Any]:
        """
        Partially update a job; only the fields present in ``data`` change.

        Raises:
            EmptyInputError: If ``data`` has no fields (no SQL is executed)
            NotFoundError: If there is no such job
        """
        fragment = self._columns.map(data)
        sql = (
            f"UPDATE {self.table} SET {fragment.clause} "
            f"WHERE {self.config.id_column} = {fragment.next_placeholder()} "
            f"RETURNING {_RETURNING}"
        )
        with self._session("update") as session:
            job = session.fetch_one(sql, [*fragment.values, id_value])

        if job is None:
            raise NotFoundError(f"No job with id: {id_value}")
        return job

    def remove(self, id_value: Any) -> None:
        """Delete a job. Raises NotFoundError if there is no such job."""
        sql = f"DELETE FROM {self.table} WHERE {self.config.id_column} = $1"
        with self._session("delete") as session:
            rowcount = session.execute(sql, [id_value])

        if rowcount == 0:
            raise NotFoundError(f"No job with id: {id_value}")
        logger.info("Removed job %s from %s", id_value, self.table)
