"""
csvdoc - load delimited text into an immutable in-memory document

Cells, rows and columns are read back as text or converted to Python and
numpy types.
"""

from .exceptions import (
    CsvError,
    CsvValidationError,
    CsvFileNotFoundError,
    MalformedInputError,
    OutOfRangeError,
    ColumnNotFoundError,
    RowNotFoundError,
    ConversionError,
)
from .parser import (
    CsvParser,
    parse_file,
    parse_string,
    count_rows,
    MAX_FILE_SIZE,
)
from .convert import convert_cell
from .document import (
    Document,
    open_csv,
    read_csv,
    get_string_cell,
    get_typed_cell,
    get_column,
)

__version__ = '0.1.0'
__all__ = [
    'Document',
    'open_csv',
    'read_csv',
    'get_string_cell',
    'get_typed_cell',
    'get_column',
    'convert_cell',
    'CsvParser',
    'parse_file',
    'parse_string',
    'count_rows',
    'MAX_FILE_SIZE',
    'CsvError',
    'CsvValidationError',
    'CsvFileNotFoundError',
    'MalformedInputError',
    'OutOfRangeError',
    'ColumnNotFoundError',
    'RowNotFoundError',
    'ConversionError',
]
