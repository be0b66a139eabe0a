"""Exceptions raised by tabledoc.

All of them are configuration errors reported at the offending call. None are
retried internally.
"""


class TableDocError(Exception):
    """Base class for tabledoc errors."""

    pass


class NullInputError(TableDocError, ValueError):
    """Raised when a required table, row, column or relation argument is None."""

    pass


class InvalidReferenceError(TableDocError, ValueError):
    """Raised when a table or column is not part of the structure it is used with.

    Examples are a relation whose endpoint table is not registered, a join column
    owned by a different table than the relation declares, or a row looked up
    with a column of another table.
    """

    pass


class CycleDetectedError(TableDocError, ValueError):
    """Raised when registering a relation would make the relation graph cyclic."""

    pass


class DuplicateJoinKeyError(TableDocError, ValueError):
    """Raised when a join column pair is already present on a relation."""

    pass
