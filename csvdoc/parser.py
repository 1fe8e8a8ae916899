"""
csvdoc parser - pure Python CSV tokenizer
"""

import logging
import os
import stat
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .exceptions import (
    CsvFileNotFoundError,
    CsvValidationError,
    MalformedInputError,
)

logger = logging.getLogger(__name__)

# Maximum file size to process (default 10GB)
MAX_FILE_SIZE = 10 * 1024 * 1024 * 1024

PathLike = Union[str, os.PathLike]


class CsvParser:
    """Quote-aware CSV tokenizer producing rows of string fields."""

    def __init__(
        self,
        delimiter: str = ',',
        quote: str = '"',
        escape: Optional[str] = None,
        comment: Optional[str] = None,
        trim: bool = False,
        skip_empty_lines: bool = False,
        max_file_size: int = MAX_FILE_SIZE,
        encoding: str = 'utf-8-sig',
    ):
        self._parse_errors: List[Tuple[int, str]] = []

        if not delimiter:
            raise CsvValidationError("Delimiter cannot be empty")
        if len(delimiter) > 1:
            raise CsvValidationError(
                f"Delimiter must be a single character, got '{delimiter}' "
                f"(length {len(delimiter)}). Multi-character delimiters are not supported."
            )
        if delimiter in '\r\n':
            raise CsvValidationError("Delimiter cannot be a line break")

        if not quote:
            raise CsvValidationError("Quote character cannot be empty")
        if len(quote) > 1:
            raise CsvValidationError(
                f"Quote must be a single character, got '{quote}' "
                f"(length {len(quote)}). Multi-character quote characters are not supported."
            )

        if escape is not None and len(escape) != 1:
            raise CsvValidationError(
                f"Escape must be a single character, got '{escape}' "
                f"(length {len(escape)})."
            )

        if comment is not None and len(comment) != 1:
            raise CsvValidationError(
                f"Comment must be a single character, got '{comment}' "
                f"(length {len(comment)})."
            )

        if delimiter == quote:
            raise CsvValidationError(
                f"Delimiter and quote character cannot be the same ('{delimiter}')"
            )

        if comment is not None and comment in (delimiter, quote):
            raise CsvValidationError(
                f"Comment character cannot be the delimiter or quote character ('{comment}')"
            )

        if max_file_size <= 0:
            raise CsvValidationError("max_file_size must be positive")

        self._delimiter = delimiter
        self._quote = quote
        # an escape equal to the quote is the doubled-quote rule, which is always on
        self._escape = escape if escape != quote else None
        self._comment = comment
        self._trim = trim
        self._skip_empty_lines = skip_empty_lines
        self._max_file_size = max_file_size
        self._encoding = encoding

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def errors(self) -> List[Tuple[int, str]]:
        """Return list of (line_number, error_message) tuples from last parse."""
        return self._parse_errors.copy()

    def _finish_field(self, chars: List[str]) -> str:
        value = ''.join(chars)
        return value.strip() if self._trim else value

    def iter_records(self, text: str) -> Iterator[Tuple[int, List[str]]]:
        """
        Tokenize ``text`` and yield ``(line_number, fields)`` per record.

        Line numbers are 1-based and point at the line the record starts on,
        so a quoted field spanning lines does not shift later records.

        Raises:
            MalformedInputError: If a quoted field is never closed
        """
        delimiter = self._delimiter
        quote = self._quote
        escape = self._escape
        comment = self._comment

        row: List[str] = []
        field: List[str] = []
        quoted = False
        in_quotes = False
        line_start = True
        line = 1
        record_line = 1

        i = 0
        n = len(text)
        while i < n:
            ch = text[i]

            if in_quotes:
                if ch == escape and i + 1 < n:
                    field.append(text[i + 1])
                    i += 2
                    continue
                if ch == quote:
                    if i + 1 < n and text[i + 1] == quote:
                        field.append(quote)
                        i += 2
                    else:
                        in_quotes = False
                        i += 1
                    continue
                if ch == '\n' or (ch == '\r' and text[i + 1:i + 2] != '\n'):
                    line += 1
                field.append(ch)
                i += 1
                continue

            if line_start and ch == comment:
                while i < n and text[i] not in '\r\n':
                    i += 1
                if text[i:i + 2] == '\r\n':
                    i += 1
                i += 1
                line += 1
                record_line = line
                continue

            if ch == '\r' or ch == '\n':
                i += 2 if text[i:i + 2] == '\r\n' else 1
                if not line_start:
                    row.append(self._finish_field(field))
                    yield record_line, row
                elif not self._skip_empty_lines:
                    yield record_line, ['']
                row = []
                field = []
                quoted = False
                line_start = True
                line += 1
                record_line = line
                continue

            line_start = False

            if ch == delimiter:
                row.append(self._finish_field(field))
                field = []
                quoted = False
                i += 1
                continue

            if ch == quote and not quoted and (
                not field or (self._trim and not ''.join(field).strip())
            ):
                field = []
                quoted = True
                in_quotes = True
                i += 1
                continue

            field.append(ch)
            i += 1

        if in_quotes:
            msg = "Unterminated quoted field"
            self._parse_errors.append((record_line, msg))
            raise MalformedInputError(
                f"Parse error at line {record_line}: {msg}", line=record_line
            )

        if not line_start:
            row.append(self._finish_field(field))
            yield record_line, row

    def _validate_file_path(self, path: PathLike) -> Path:
        """
        Validate the file path before reading it.

        Checks for:
        - Missing files
        - Device files, FIFOs and sockets (follows symlinks to the final target)
        - File size limits
        """
        file_path = Path(path)

        if not file_path.exists():
            raise CsvFileNotFoundError(f"File not found: {path}")

        real_path = file_path.resolve()

        try:
            file_stat = real_path.stat()
        except OSError as e:
            raise CsvFileNotFoundError(f"Cannot access file {path}: {e}") from e

        if stat.S_ISBLK(file_stat.st_mode) or stat.S_ISCHR(file_stat.st_mode):
            raise CsvValidationError(f"Cannot parse device file: {path}")
        if stat.S_ISFIFO(file_stat.st_mode):
            raise CsvValidationError(f"Cannot parse FIFO/pipe: {path}")
        if stat.S_ISSOCK(file_stat.st_mode):
            raise CsvValidationError(f"Cannot parse socket: {path}")
        if not stat.S_ISREG(file_stat.st_mode):
            raise CsvValidationError(f"Path is not a regular file: {path}")

        if file_stat.st_size > self._max_file_size:
            raise CsvValidationError(
                f"File too large: {file_stat.st_size} bytes "
                f"(max {self._max_file_size} bytes). "
                f"Increase max_file_size if this is intentional."
            )

        return real_path

    def read_text(self, path: PathLike) -> str:
        """
        Read the whole file at ``path`` as text.

        Raises:
            CsvFileNotFoundError: If the path is missing or unreadable
            CsvValidationError: If the path is not a regular file or too large
            MalformedInputError: If the bytes are not valid in the encoding
        """
        real_path = self._validate_file_path(path)
        try:
            with open(real_path, 'r', encoding=self._encoding, newline='') as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise MalformedInputError(
                f"Cannot decode {path} as {self._encoding}: {e}"
            ) from e
        except OSError as e:
            raise CsvFileNotFoundError(f"Cannot read file {path}: {e}") from e

    def parse_file(self, path: PathLike) -> List[List[str]]:
        """
        Parse a CSV file and return all rows.

        Args:
            path: Path to the CSV file

        Returns:
            List of rows, where each row is a list of field values.

        Raises:
            CsvFileNotFoundError: If the path is missing or unreadable
            CsvValidationError: If path validation fails
            MalformedInputError: If parsing fails
        """
        self._parse_errors = []
        logger.debug("Parsing %s (delimiter=%r)", path, self._delimiter)
        rows = self.parse_string(self.read_text(path))
        logger.debug("Parsed %d rows from %s", len(rows), path)
        return rows

    def parse_string(self, content: str) -> List[List[str]]:
        """
        Parse a CSV string and return all rows.

        Args:
            content: CSV content as a string

        Returns:
            List of rows, where each row is a list of field values.

        Raises:
            MalformedInputError: If parsing fails
        """
        return [fields for _, fields in self.parse_records(content)]

    def parse_records(self, content: str) -> List[Tuple[int, List[str]]]:
        """
        Parse a CSV string and return ``(line_number, fields)`` per record.

        Raises:
            MalformedInputError: If parsing fails
        """
        self._parse_errors = []
        if content.startswith('\ufeff'):
            content = content[1:]
        return list(self.iter_records(content))


def parse_file(
    path: PathLike,
    delimiter: str = ',',
    quote: str = '"',
    **kwargs
) -> List[List[str]]:
    """Parse a CSV file and return all rows."""
    parser = CsvParser(delimiter=delimiter, quote=quote, **kwargs)
    return parser.parse_file(path)


def parse_string(
    content: str,
    delimiter: str = ',',
    quote: str = '"',
    **kwargs
) -> List[List[str]]:
    """Parse a CSV string and return all rows."""
    parser = CsvParser(delimiter=delimiter, quote=quote, **kwargs)
    return parser.parse_string(content)


def count_rows(path: PathLike, **kwargs) -> int:
    """Count the records in a CSV file without keeping them."""
    parser = CsvParser(**kwargs)
    text = parser.read_text(path)
    return sum(1 for _ in parser.iter_records(text))
