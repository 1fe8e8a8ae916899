"""
In-memory CSV document with cell, row and column accessors.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .convert import convert_cell, get_converter
from .exceptions import (
    ColumnNotFoundError,
    MalformedInputError,
    OutOfRangeError,
    RowNotFoundError,
)
from .parser import CsvParser, PathLike

logger = logging.getLogger(__name__)

ColumnKey = Union[int, str]
RowKey = Union[int, str]


def _check_index(index, extent: int, kind: str) -> int:
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise OutOfRangeError(f"{kind} index must be an integer, got {index!r}")
    index = int(index)
    if index < 0 or index >= extent:
        raise OutOfRangeError(f"{kind} index {index} out of range (0..{extent - 1})")
    return index


class Document:
    """
    Immutable table of string cells loaded from delimited text.

    The optional header row supplies column names and the optional label
    column supplies row names. Neither is part of the data: column indices
    count data columns only and row indices count data rows only.

    Every data row has the same number of cells. Ragged input raises
    ``MalformedInputError`` unless ``pad_rows`` is set, in which case short
    rows are padded with empty strings up to the widest row. When ``lines``
    gives the source line of each row the error names that line.
    """

    __slots__ = (
        '_rows', '_column_names', '_column_map',
        '_row_names', '_row_map', '_source',
    )

    def __init__(
        self,
        rows: Sequence[Sequence[str]],
        header: bool = True,
        label_column: bool = False,
        pad_rows: bool = False,
        source: Optional[str] = None,
        lines: Optional[Sequence[int]] = None,
    ):
        records = [list(r) for r in rows]
        width = self._normalize_width(records, pad_rows, lines)

        column_names: Tuple[str, ...] = ()
        if header and records:
            column_names = tuple(records.pop(0))
            if label_column:
                column_names = column_names[1:]

        row_names: Tuple[str, ...] = ()
        if label_column and width > 0:
            row_names = tuple(r[0] for r in records)
            records = [r[1:] for r in records]

        self._rows: Tuple[Tuple[str, ...], ...] = tuple(tuple(r) for r in records)
        self._column_names = column_names
        self._row_names = row_names
        self._column_map = self._first_positions(column_names)
        self._row_map = self._first_positions(row_names)
        self._source = source

    @staticmethod
    def _normalize_width(
        records: List[List[str]],
        pad_rows: bool,
        lines: Optional[Sequence[int]] = None,
    ) -> int:
        if not records:
            return 0
        if pad_rows:
            width = max(len(r) for r in records)
            padded = 0
            for r in records:
                if len(r) < width:
                    r.extend([''] * (width - len(r)))
                    padded += 1
            if padded:
                logger.debug("Padded %d rows to %d fields", padded, width)
            return width

        width = len(records[0])
        for i, r in enumerate(records):
            if len(r) != width:
                if lines is None:
                    raise MalformedInputError(
                        f"Record {i + 1} has {len(r)} fields, expected {width}"
                    )
                raise MalformedInputError(
                    f"Line {lines[i]} has {len(r)} fields, expected {width}",
                    line=lines[i],
                )
        return width

    @staticmethod
    def _first_positions(names: Sequence[str]) -> Dict[str, int]:
        positions: Dict[str, int] = {}
        for i, name in enumerate(names):
            positions.setdefault(name, i)
        return positions

    def __repr__(self) -> str:
        src = f" source={self._source!r}" if self._source else ""
        return f"<Document rows={self.row_count} columns={self.column_count}{src}>"

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Tuple[str, ...]]:
        return iter(self._rows)

    @property
    def row_count(self) -> int:
        """Number of data rows (header excluded)."""
        return len(self._rows)

    @property
    def column_count(self) -> int:
        """Number of data columns (label column excluded)."""
        if self._rows:
            return len(self._rows[0])
        return len(self._column_names)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.row_count, self.column_count

    @property
    def column_names(self) -> List[str]:
        return list(self._column_names)

    @property
    def row_names(self) -> List[str]:
        return list(self._row_names)

    @property
    def has_header(self) -> bool:
        return bool(self._column_names)

    @property
    def has_labels(self) -> bool:
        return bool(self._row_names)

    @property
    def source(self) -> Optional[str]:
        return self._source

    def get_column_index(self, name: str) -> int:
        try:
            return self._column_map[name]
        except KeyError:
            raise ColumnNotFoundError(name) from None

    def get_row_index(self, name: str) -> int:
        try:
            return self._row_map[name]
        except KeyError:
            raise RowNotFoundError(name) from None

    def _resolve_column(self, column: ColumnKey) -> int:
        if isinstance(column, str):
            return self.get_column_index(column)
        return _check_index(column, self.column_count, "Column")

    def _resolve_row(self, row: RowKey) -> int:
        if isinstance(row, str):
            return self.get_row_index(row)
        return _check_index(row, self.row_count, "Row")

    def get_string_cell(self, column_index: int, row_index: int) -> str:
        """Return the raw text at (column_index, row_index)."""
        c = _check_index(column_index, self.column_count, "Column")
        r = _check_index(row_index, self.row_count, "Row")
        return self._rows[r][c]

    def get_typed_cell(self, column_index: int, row_index: int, target_type=str) -> Any:
        """Return the cell at (column_index, row_index) converted to ``target_type``."""
        text = self.get_string_cell(column_index, row_index)
        return convert_cell(text, target_type, row=int(row_index), column=int(column_index))

    def get_cell(self, column: ColumnKey, row: RowKey, target_type=str) -> Any:
        """Like ``get_typed_cell`` but columns and rows may also be given by name."""
        c = self._resolve_column(column)
        r = self._resolve_row(row)
        return convert_cell(self._rows[r][c], target_type, row=r, column=column)

    def get_column(self, column: ColumnKey, target_type=str) -> List[Any]:
        """
        Return every data cell of ``column`` converted to ``target_type``.

        Args:
            column: Zero-based column index or header name
            target_type: Type tag understood by ``csvdoc.convert``

        Returns:
            One value per data row, in row order.

        Raises:
            ColumnNotFoundError: If a column name is not in the header
            OutOfRangeError: If a column index is outside the document
            ConversionError: On the first cell that does not convert; its
                ``row`` attribute is the zero-based data row index
        """
        c = self._resolve_column(column)
        converter = get_converter(target_type)
        return [
            convert_cell(r[c], target_type, row=i, column=column, converter=converter)
            for i, r in enumerate(self._rows)
        ]

    def get_column_array(self, column: ColumnKey, dtype=np.float64) -> np.ndarray:
        """Return ``column`` as a read-only numpy array of ``dtype``."""
        values = self.get_column(column, dtype)
        arr = np.array(values, dtype=dtype)
        arr.flags.writeable = False
        return arr

    def get_row(self, row: RowKey, target_type=str) -> List[Any]:
        """Return every data cell of ``row`` converted to ``target_type``."""
        r = self._resolve_row(row)
        converter = get_converter(target_type)
        return [
            convert_cell(text, target_type, row=r, column=c, converter=converter)
            for c, text in enumerate(self._rows[r])
        ]


def _load(
    text: str,
    parser: CsvParser,
    header: bool,
    label_column: bool,
    pad_rows: bool,
    source: Optional[str],
) -> Document:
    records = parser.parse_records(text)
    doc = Document(
        [fields for _, fields in records],
        header=header,
        label_column=label_column,
        pad_rows=pad_rows,
        source=source,
        lines=[line for line, _ in records],
    )
    logger.debug("Loaded %r", doc)
    return doc


def open_csv(
    path: PathLike,
    *,
    header: bool = True,
    label_column: bool = False,
    pad_rows: bool = False,
    delimiter: str = ',',
    quote: str = '"',
    skip_empty_lines: bool = True,
    **kwargs
) -> Document:
    """
    Load the delimited text file at ``path`` into a ``Document``.

    Extra keyword arguments (``escape``, ``comment``, ``trim``,
    ``max_file_size``, ``encoding``) are passed to ``CsvParser``.

    Raises:
        CsvFileNotFoundError: If the path is missing or unreadable
        MalformedInputError: If the text does not form a rectangular table
        CsvValidationError: If the options or the path kind are invalid
    """
    parser = CsvParser(
        delimiter=delimiter,
        quote=quote,
        skip_empty_lines=skip_empty_lines,
        **kwargs
    )
    logger.debug("Opening %s", path)
    return _load(parser.read_text(path), parser, header, label_column, pad_rows, str(path))


def read_csv(
    content: str,
    *,
    header: bool = True,
    label_column: bool = False,
    pad_rows: bool = False,
    delimiter: str = ',',
    quote: str = '"',
    skip_empty_lines: bool = True,
    **kwargs
) -> Document:
    """Build a ``Document`` from CSV text already in memory."""
    parser = CsvParser(
        delimiter=delimiter,
        quote=quote,
        skip_empty_lines=skip_empty_lines,
        **kwargs
    )
    return _load(content, parser, header, label_column, pad_rows, None)


def get_string_cell(doc: Document, column_index: int, row_index: int) -> str:
    """Return the raw text of one cell."""
    return doc.get_string_cell(column_index, row_index)


def get_typed_cell(doc: Document, column_index: int, row_index: int, target_type=str) -> Any:
    """Return one cell converted to ``target_type``."""
    return doc.get_typed_cell(column_index, row_index, target_type)


def get_column(doc: Document, column: ColumnKey, target_type=str) -> List[Any]:
    """Return a whole column converted to ``target_type``."""
    return doc.get_column(column, target_type)
