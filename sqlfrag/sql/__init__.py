from .columns import ColumnMapper, sql_for_partial_update
from .filters import (
    AtLeast,
    AtMost,
    DerivedBoolean,
    FilterCompiler,
    PredicateShape,
    PredicateStrategy,
    PredicateTable,
    SubstringMatch,
)
from .models import CompiledFragment
from .params import placeholder, quote_identifier, to_named_params, validate_identifier

__all__ = [
    "ColumnMapper",
    "sql_for_partial_update",
    "FilterCompiler",
    "PredicateTable",
    "PredicateStrategy",
    "PredicateShape",
    "SubstringMatch",
    "AtLeast",
    "AtMost",
    "DerivedBoolean",
    "CompiledFragment",
    "placeholder",
    "quote_identifier",
    "to_named_params",
    "validate_identifier",
]
