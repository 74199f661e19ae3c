class ExpenseIQError(Exception):
    """Base class for errors raised by the expense core."""


class ValidationError(ExpenseIQError, ValueError):
    """Bad or missing expense fields. Nothing is saved."""


class PersistenceError(ExpenseIQError):
    """The local store could not be read or written."""


class ImportFormatError(ExpenseIQError):
    """An import document is missing or carries a malformed expense sequence."""
