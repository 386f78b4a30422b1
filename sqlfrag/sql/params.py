from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

# PostgreSQL truncates identifiers longer than NAMEDATALEN - 1 bytes.
MAX_IDENTIFIER_LENGTH = 63

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
_PLACEHOLDER_RE = re.compile(r"\$(\d+)")
# Also captures a cast written straight after a placeholder, as in $1::int
_BIND_RE = re.compile(r"\$(\d+)(::)?")


def validate_identifier(name: str, identifier_type: str = "identifier") -> str:
    """
    Validate that an identifier (table/column name) is safe for SQL interpolation.

    ⚠️ SECURITY CONTRACT ⚠️
    This function validates identifier format but does NOT make untrusted input
    safe. Identifiers MUST be owned by application code (hardcoded or checked
    against an allowlist at the boundary), never taken directly from a request.

    Args:
        name: The identifier to validate
        identifier_type: Description of the identifier (for error messages)

    Returns:
        The validated identifier (unchanged if valid)

    Raises:
        TypeError: If identifier is not a string
        ValueError: If identifier contains unsafe characters or is invalid

    Example:
        >>> validate_identifier("jobs", "table")
        'jobs'
        >>> validate_identifier("'; DROP TABLE--", "table")
        ValueError: Invalid table "'; DROP TABLE--": ...
    """
    if not isinstance(name, str):
        raise TypeError(f"{identifier_type} must be a string, got {type(name).__name__}")

    if not name:
        raise ValueError(f"{identifier_type} cannot be empty")

    if not _IDENTIFIER_RE.match(name):
        raise ValueError(
            f"Invalid {identifier_type} {name!r}: "
            "must start with letter/underscore and contain only alphanumeric characters and underscores"
        )

    if len(name) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(
            f"{identifier_type} {name!r} exceeds the {MAX_IDENTIFIER_LENGTH}-character limit"
        )

    return name


def quote_identifier(name: str) -> str:
    """
    Wrap a column name in double quotes so mixed case and reserved words survive.

    No escaping is applied to the name itself; callers restrict names to an
    allowlist before they get here.
    """
    return f'"{name}"'


def placeholder(position: int) -> str:
    """Render the 1-based positional placeholder for ``position`` (``$1``, ``$2``, ...)."""
    if isinstance(position, bool) or not isinstance(position, int):
        raise TypeError(f"position must be an int, got {type(position).__name__}")
    if position < 1:
        raise ValueError(f"position must be >= 1, got {position}")
    return f"${position}"


def placeholder_ordinals(sql: str) -> list[int]:
    """Return every ``$N`` ordinal in ``sql``, in order of appearance."""
    return [int(m) for m in _PLACEHOLDER_RE.findall(sql)]


def check_placeholders(sql: str, value_count: int) -> None:
    """
    Ensure the placeholders in ``sql`` are exactly ``$1`` .. ``$value_count``,
    each used once and in ascending order of appearance.

    Raises:
        ValueError: If an ordinal is missing, repeated, out of order or out of range
    """
    used = placeholder_ordinals(sql)
    expected = list(range(1, value_count + 1))
    if used != expected:
        raise ValueError(
            f"Placeholders {used} do not match {value_count} bound value(s)"
        )


def ordered_pairs(
    data: Mapping[str, Any] | Iterable[tuple[str, Any]] | None,
) -> list[tuple[str, Any]]:
    """
    Normalize a mapping or an iterable of ``(name, value)`` pairs into an ordered list.

    Placeholder numbering follows the order of the returned list, so a mapping
    contributes its insertion order and a pair sequence its own order.
    """
    if data is None:
        return []
    if isinstance(data, Mapping):
        return list(data.items())
    return [(name, value) for name, value in data]


def _named_bind(prefix: str, match: re.Match) -> str:
    bind = f":{prefix}{match.group(1)}"
    if match.group(2):
        bind += r"\:\:"
    return bind


def to_named_params(
    sql: str,
    values: Sequence[Any],
    prefix: str = "p",
) -> tuple[str, dict[str, Any]]:
    """
    Convert a ``$N`` statement plus positional values into SQLAlchemy named binds.

    ``"salary >= $1"`` with ``[75000]`` becomes ``"salary >= :p1"`` with
    ``{"p1": 75000}``, ready for ``sqlalchemy.text()``.

    A cast right after a placeholder (``$1::int``) is escaped to
    ``:p1\\:\\:int``; ``text()`` would otherwise read ``:p1::int`` as literal text.

    Raises:
        ValueError: If the placeholders do not cover exactly ``len(values)`` positions
    """
    if isinstance(values, (str, bytes)):
        raise TypeError("values must be a sequence of bound values, not a string")
    check_placeholders(sql, len(values))
    named_sql = _BIND_RE.sub(lambda m: _named_bind(prefix, m), sql)
    params = {f"{prefix}{i}": value for i, value in enumerate(values, start=1)}
    return named_sql, params
