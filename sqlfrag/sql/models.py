from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .params import check_placeholders, placeholder


@dataclass(frozen=True)
class CompiledFragment:
    """
    A SQL fragment plus the values bound to its positional placeholders.

    ``clause`` uses ``$1`` .. ``$N`` where N is ``len(values)``; construction
    fails with ValueError otherwise.
    """
    clause: str = ""
    values: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        check_placeholders(self.clause, len(self.values))

    @property
    def is_empty(self) -> bool:
        return not self.clause

    @property
    def next_position(self) -> int:
        """Ordinal a caller should use for the first parameter appended after this fragment."""
        return len(self.values) + 1

    def next_placeholder(self) -> str:
        return placeholder(self.next_position)

    def where(self) -> str:
        """Render ``WHERE <clause>``, or an empty string when there is nothing to filter on."""
        if self.is_empty:
            return ""
        return f"WHERE {self.clause}"
