"""
Exception hierarchy for csvdoc.
"""

from typing import Optional


class CsvError(Exception):
    """Base exception for csvdoc errors."""
    pass


class CsvValidationError(CsvError, ValueError):
    """Raised when input validation fails."""
    pass


class CsvFileNotFoundError(CsvError, FileNotFoundError):
    """Raised when the source path does not exist or cannot be read."""
    pass


class MalformedInputError(CsvError):
    """Raised when the input text cannot be turned into a rectangular table."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class OutOfRangeError(CsvError, IndexError):
    """Raised when a row or column index falls outside the document."""
    pass


class ColumnNotFoundError(CsvError, LookupError):
    """Raised when a column name is not in the header."""

    def __init__(self, name: str):
        super().__init__(f"Column not found: {name!r}")
        self.name = name


class RowNotFoundError(ColumnNotFoundError):
    """Raised when a row label is not in the label column."""

    def __init__(self, name: str):
        CsvError.__init__(self, f"Row not found: {name!r}")
        self.name = name


class ConversionError(CsvError, ValueError):
    """Raised when a cell cannot be converted to the requested type."""

    def __init__(self, value: str, target_type, row: Optional[int] = None, column=None):
        type_name = getattr(target_type, '__name__', str(target_type))
        msg = f"Cannot convert {value!r} to {type_name}"
        if row is not None:
            msg += f" (row {row}"
            if column is not None:
                msg += f", column {column!r}"
            msg += ")"
        super().__init__(msg)
        self.value = value
        self.target_type = target_type
        self.row = row
        self.column = column
