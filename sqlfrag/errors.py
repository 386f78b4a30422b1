class SqlFragError(Exception):
    """Base exception for sqlfrag errors."""


class EmptyInputError(SqlFragError):
    """A partial update was requested with no fields to set."""


class MisconfiguredPredicateTableError(SqlFragError):
    """A predicate table entry cannot produce a well-formed predicate."""


class NotFoundError(SqlFragError):
    """No row matched the requested primary key."""
