from .errors import EmptyInputError, MisconfiguredPredicateTableError, SqlFragError
from .sql.columns import ColumnMapper, sql_for_partial_update
from .sql.filters import FilterCompiler
from .sql.models import CompiledFragment

__all__ = [
    "ColumnMapper",
    "sql_for_partial_update",
    "FilterCompiler",
    "CompiledFragment",
    "SqlFragError",
    "EmptyInputError",
    "MisconfiguredPredicateTableError",
]
