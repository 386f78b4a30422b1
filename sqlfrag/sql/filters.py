from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from .models import CompiledFragment
from .params import ordered_pairs, placeholder, placeholder_ordinals, validate_identifier
from ..errors import MisconfiguredPredicateTableError

logger = logging.getLogger(__name__)


class PredicateShape(str, Enum):
    SUBSTRING = "substring"
    AT_LEAST = "at_least"
    AT_MOST = "at_most"
    DERIVED_BOOLEAN = "derived_boolean"


def _column(name: str) -> str:
    try:
        return validate_identifier(name, "filter column")
    except (TypeError, ValueError) as exc:
        raise MisconfiguredPredicateTableError(str(exc)) from exc


class PredicateStrategy(ABC):
    """
    Abstract base for a single WHERE predicate generator.

    ``arity`` is the number of positional values every call to ``render``
    binds; the compiler enforces it.
    """

    shape: PredicateShape
    arity: int

    @abstractmethod
    def render(self, raw: Any, position: int) -> tuple[str, list[Any]]:
        """Return the predicate SQL and its bound values, numbering from ``position``."""
        ...


class SubstringMatch(PredicateStrategy):
    """Case-insensitive ``column ILIKE '%raw%'``."""

    shape = PredicateShape.SUBSTRING
    arity = 1

    def __init__(self, column: str) -> None:
        self.column = _column(column)

    def render(self, raw: Any, position: int) -> tuple[str, list[Any]]:
        return f"{self.column} ILIKE {placeholder(position)}", [f"%{raw}%"]


class _Comparison(PredicateStrategy):
    operator: str
    arity = 1

    def __init__(self, column: str) -> None:
        self.column = _column(column)

    def render(self, raw: Any, position: int) -> tuple[str, list[Any]]:
        # Numeric coercion is left to the caller / database.
        return f"{self.column} {self.operator} {placeholder(position)}", [raw]


class AtLeast(_Comparison):
    shape = PredicateShape.AT_LEAST
    operator = ">="


class AtMost(_Comparison):
    shape = PredicateShape.AT_MOST
    operator = "<="


class DerivedBoolean(PredicateStrategy):
    """
    Picks one of two fixed predicates from a boolean-like flag.

    The flag is true for the string ``"true"`` or the boolean ``True``; any
    other value selects ``when_false``. Neither branch binds a parameter.
    """

    shape = PredicateShape.DERIVED_BOOLEAN
    arity = 0

    def __init__(self, when_true: str, when_false: str) -> None:
        for sql in (when_true, when_false):
            if not isinstance(sql, str) or not sql.strip():
                raise MisconfiguredPredicateTableError("Derived predicates must be non-empty SQL")
            if placeholder_ordinals(sql):
                raise MisconfiguredPredicateTableError(
                    f"Derived predicate {sql!r} must not contain placeholders"
                )
        self.when_true = when_true
        self.when_false = when_false

    @staticmethod
    def is_true(raw: Any) -> bool:
        return raw is True or raw == "true"

    def render(self, raw: Any, position: int) -> tuple[str, list[Any]]:
        return (self.when_true if self.is_true(raw) else self.when_false), []


class PredicateTable:
    """
    Immutable per-entity table of recognized filter keys.

    Built once at import time; every entry is checked here so a bad table
    fails loudly at startup rather than on the first request.
    """

    def __init__(self, entity: str, entries: Mapping[str, PredicateStrategy]) -> None:
        for key, strategy in entries.items():
            if not isinstance(strategy, PredicateStrategy):
                raise MisconfiguredPredicateTableError(
                    f"{entity} filter {key!r} has no predicate strategy (got {strategy!r})"
                )
            shape = getattr(strategy, "shape", None)
            if not isinstance(shape, PredicateShape):
                raise MisconfiguredPredicateTableError(
                    f"{entity} filter {key!r} declares no predicate shape (got {shape!r})"
                )
            arity = getattr(strategy, "arity", None)
            if not isinstance(arity, int) or arity < 0:
                raise MisconfiguredPredicateTableError(
                    f"{entity} {shape.value} filter {key!r} declares invalid arity {arity!r}"
                )
        self.entity = entity
        self._entries = MappingProxyType(dict(entries))

    def get(self, key: str) -> PredicateStrategy | None:
        return self._entries.get(key)

    def keys(self):
        return self._entries.keys()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class FilterCompiler:
    """
    Compiles optional search criteria into a WHERE-clause fragment.

    Criteria are visited in the caller's order and dispatched by key through
    the entity's PredicateTable. Keys the table does not recognize are
    ignored: callers may pass a superset of filters and only the ones
    meaningful for this entity produce predicates. Parameter numbering covers
    emitted values only, so zero-arity predicates never leave gaps.

    Usage:
        compiler = FilterCompiler(JOB_FILTERS)
        fragment = compiler.compile({"title": "eng", "hasEquity": "true"})
        # fragment.clause == "title ILIKE $1 AND equity != 0"
        # fragment.values == ["%eng%"]
        sql = f"SELECT ... FROM jobs {fragment.where()} ORDER BY title"
    """

    def __init__(self, table: PredicateTable) -> None:
        self.table = table

    def compile(
        self,
        criteria: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
    ) -> CompiledFragment:
        """
        Raises:
            MisconfiguredPredicateTableError: If a strategy breaks its declared arity
        """
        predicates: list[str] = []
        values: list[Any] = []

        for key, raw in ordered_pairs(criteria):
            strategy = self.table.get(key)
            if strategy is None:
                logger.debug("Ignoring unrecognized %s filter %r", self.table.entity, key)
                continue

            position = len(values) + 1
            sql, bound = strategy.render(raw, position)
            expected = list(range(position, position + strategy.arity))
            if len(bound) != strategy.arity or placeholder_ordinals(sql) != expected:
                raise MisconfiguredPredicateTableError(
                    f"{self.table.entity} {strategy.shape.value} filter {key!r} rendered {sql!r} with "
                    f"{len(bound)} value(s); expected placeholders {expected}"
                )
            predicates.append(sql)
            values.extend(bound)

        return CompiledFragment(clause=" AND ".join(predicates), values=values)
