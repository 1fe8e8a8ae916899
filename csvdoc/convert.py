"""
Cell text to typed value conversion.

A *type tag* is one of ``str``, ``int``, ``float``, ``bool``,
``decimal.Decimal``, or a numpy integer, float, bool or unicode dtype
(``numpy.float32``, ``'int64'``, ...). Anything else is rejected.
Conversion is strict: empty text is never a number, ``int`` rejects
``"1.5"`` and numpy floats reject values that overflow to infinity.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional

import numpy as np

from .exceptions import ConversionError, CsvValidationError

Converter = Callable[[str], Any]

BOOL_TRUE = ('true', 't', 'yes', 'y', '1')
BOOL_FALSE = ('false', 'f', 'no', 'n', '0')


def _to_str(text: str) -> str:
    return text


def _to_int(text: str) -> int:
    return int(text)


def _to_float(text: str) -> float:
    return float(text)


def _to_bool(text: str) -> bool:
    s = text.strip().lower()
    if s in BOOL_TRUE:
        return True
    if s in BOOL_FALSE:
        return False
    raise ValueError(f"Invalid bool literal: {text!r}")


def _to_decimal(text: str) -> Decimal:
    try:
        return Decimal(text.strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal literal: {text!r}") from e


_CONVERTERS = {
    str: _to_str,
    int: _to_int,
    float: _to_float,
    bool: _to_bool,
    Decimal: _to_decimal,
}


def _numpy_converter(dtype: np.dtype) -> Converter:
    scalar = dtype.type
    if dtype.kind in 'iu':
        return lambda text: scalar(_to_int(text))
    if dtype.kind == 'f':
        def to_numpy_float(text: str):
            f = _to_float(text)
            with np.errstate(over='ignore'):
                value = scalar(f)
            if np.isinf(value) and not math.isinf(f):
                raise OverflowError(f"{text!r} out of range for {dtype}")
            return value
        return to_numpy_float
    if dtype.kind == 'b':
        return lambda text: scalar(_to_bool(text))
    if dtype.kind == 'U':
        return _to_str
    raise CsvValidationError(f"Unsupported target type: {dtype}")


def get_converter(target_type) -> Converter:
    """Return the ``str -> value`` function for a type tag."""
    if target_type is None:
        raise CsvValidationError("Target type cannot be None")
    try:
        converter = _CONVERTERS.get(target_type)
    except TypeError:
        converter = None
    if converter is not None:
        return converter

    try:
        dtype = np.dtype(target_type)
    except (TypeError, ValueError) as e:
        raise CsvValidationError(f"Unsupported target type: {target_type!r}") from e
    return _numpy_converter(dtype)


def convert_cell(
    text: str,
    target_type=str,
    row: Optional[int] = None,
    column=None,
    converter: Optional[Converter] = None,
) -> Any:
    """
    Convert one cell's text to ``target_type``.

    Raises:
        ConversionError: If the text is not a valid literal of the type
        CsvValidationError: If ``target_type`` is not a supported type tag
    """
    if converter is None:
        converter = get_converter(target_type)
    try:
        return converter(text)
    except (ValueError, OverflowError) as e:
        raise ConversionError(text, target_type, row=row, column=column) from e
