from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from .models import CompiledFragment
from .params import ordered_pairs, placeholder, quote_identifier
from ..errors import EmptyInputError

logger = logging.getLogger(__name__)


class ColumnMapper:
    """
    Builds the column list of a partial UPDATE's SET clause.

    Usage:
        mapper = ColumnMapper({"firstName": "first_name"})
        fragment = mapper.map({"firstName": "Bob", "age": 40})
        # fragment.clause == '"first_name"=$1, "age"=$2'
        # fragment.values == ["Bob", 40]

    Logical names missing from the translation table are used verbatim as
    column names. Field names are quoted but not sanitized: callers MUST
    restrict them to a known set before calling.
    """

    def __init__(self, column_names: Mapping[str, str] | None = None) -> None:
        self.column_names = MappingProxyType(dict(column_names or {}))

    def column_for(self, name: str) -> str:
        return self.column_names.get(name, name)

    def map(self, data: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> CompiledFragment:
        """
        Map fields to ``"column"=$N`` assignments in iteration order.

        Raises:
            EmptyInputError: If ``data`` has no fields
            ValueError: If the same field appears twice in a pair sequence
        """
        pairs = ordered_pairs(data)
        if not pairs:
            raise EmptyInputError("No data")

        cols: list[str] = []
        values: list[Any] = []
        seen: set[str] = set()
        for position, (name, value) in enumerate(pairs, start=1):
            if name in seen:
                raise ValueError(f"Field {name!r} given more than once")
            seen.add(name)
            cols.append(f"{quote_identifier(self.column_for(name))}={placeholder(position)}")
            values.append(value)

        logger.debug("Mapped %d field(s) for partial update", len(values))
        return CompiledFragment(clause=", ".join(cols), values=values)


def sql_for_partial_update(
    data: Mapping[str, Any] | Iterable[tuple[str, Any]],
    column_names: Mapping[str, str] | None = None,
) -> CompiledFragment:
    """
    Build the SET-clause fragment for a partial update.

    ``{"firstName": "Aliya", "age": 32}`` with ``{"firstName": "first_name"}``
    gives ``'"first_name"=$1, "age"=$2'`` and ``["Aliya", 32]``.

    Raises EmptyInputError if ``data`` is empty.
    """
    return ColumnMapper(column_names).map(data)
