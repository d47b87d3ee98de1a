"""
Conversion of raw column bytes into text and JSON values

All multi-byte values are little-endian. A null column (``None``) always
formats as an empty string, or ``None`` for JSON, whatever its type.
"""

import logging
import math
from datetime import timedelta
from typing import Any, Callable, Optional

import numpy as np

from .constants import (
    INVALID_STRING,
    MICROSECONDS_PER_SECOND,
    SECONDS_PER_DAY,
    TIMETZ_ZONE_BITS,
    TIMETZ_ZONE_MASK,
    VERTICA_EPOCH,
    VERTICA_EPOCH_DATE,
)
from .conversion import convert
from .errors import FormatError
from .types import ColumnConversion, ColumnSchema, ColumnType, Row
from .utils import le_int, le_words, trunc_divmod

logger = logging.getLogger(__name__)


class _WidthError(ValueError):
    pass


def _int64(value: bytes) -> int:
    if len(value) != 8:
        raise _WidthError(f"expected 8 bytes, got {len(value)}")
    return le_int(value)


def _clock(seconds: int) -> str:
    seconds %= SECONDS_PER_DAY
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _tz_suffix(hours: int) -> str:
    return f"{hours:+03d}"


def format_integer(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    try:
        return str(le_int(value))
    except ValueError:
        raise FormatError(f"incorrect integer byte count: {len(value)}") from None


def format_float(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    if len(value) != 8:
        raise _WidthError(f"expected 8 bytes, got {len(value)}")
    number = float(np.frombuffer(value, dtype="<f8")[0])
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    return np.format_float_positional(number, trim="-")


def format_char(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    try:
        text = value.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.warning("couldn't convert %s to a string: %s", value.hex(" ").upper(), e)
        text = INVALID_STRING
    return text.strip()


def format_boolean(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    if not value:
        raise _WidthError("expected 1 byte, got 0")
    return "1" if value[0] != 0 else "0"


def format_date(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    # Stored unsigned, read back as a signed day count
    days = _int64(value)
    return (VERTICA_EPOCH_DATE + timedelta(days=days)).isoformat()


def format_timestamp(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    stamp = VERTICA_EPOCH + timedelta(microseconds=_int64(value))
    return stamp.isoformat(sep=" ", timespec="seconds")


def format_timestamptz(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    stamp = VERTICA_EPOCH + timedelta(microseconds=_int64(value))
    stamp += timedelta(hours=tz_offset)
    return stamp.isoformat(sep=" ", timespec="seconds") + _tz_suffix(tz_offset)


def format_time(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    return _clock(_int64(value) // MICROSECONDS_PER_SECOND)


def format_timetz(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    if len(value) != 8:
        raise _WidthError(f"expected 8 bytes, got {len(value)}")
    word = le_int(value, signed=False)

    microseconds = word >> TIMETZ_ZONE_BITS
    zone = word & TIMETZ_ZONE_MASK
    hours = -(zone // 3600 - 24)

    # Zone offset is added in minutes and wraps around midnight
    shifted = timedelta(microseconds=microseconds) + timedelta(minutes=hours * 60)
    seconds = shifted.days * SECONDS_PER_DAY + shifted.seconds
    return _clock(seconds) + _tz_suffix(hours)


def format_binary(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    filtered = bytes(b for b in value if b != 0)
    if conversion is not None:
        return convert(conversion, filtered)
    return "0x" + "".join(f"{b:X}" for b in filtered)


def format_numeric(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    words = le_words(value)
    while words and words[0] == 0:
        words.pop(0)
    return "".join(str(w) for w in words)


def format_interval(value: bytes, tz_offset: int, conversion: Optional[ColumnConversion]) -> str:
    seconds, _ = trunc_divmod(_int64(value), MICROSECONDS_PER_SECOND)
    hours, remainder = trunc_divmod(seconds, 3600)
    minutes, seconds = trunc_divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


_FORMATTERS: dict[ColumnType, Callable[[bytes, int, Optional[ColumnConversion]], str]] = {
    ColumnType.INTEGER: format_integer,
    ColumnType.FLOAT: format_float,
    ColumnType.CHAR: format_char,
    ColumnType.VARCHAR: format_char,
    ColumnType.BOOLEAN: format_boolean,
    ColumnType.DATE: format_date,
    ColumnType.TIMESTAMP: format_timestamp,
    ColumnType.TIMESTAMPTZ: format_timestamptz,
    ColumnType.TIME: format_time,
    ColumnType.TIMETZ: format_timetz,
    ColumnType.VARBINARY: format_binary,
    ColumnType.BINARY: format_binary,
    ColumnType.NUMERIC: format_numeric,
    ColumnType.INTERVAL: format_interval,
}


def format_value(
    column_type: ColumnType,
    value: Optional[bytes],
    tz_offset: int = 0,
    conversion: Optional[ColumnConversion] = None,
) -> str:
    """
    Format raw column bytes as text

    Parameters:
    -----------
    column_type : ColumnType
        Logical type of the column
    value : Optional[bytes]
        Raw bytes, or None for a null column
    tz_offset : int, default=0
        Hours added to TIMESTAMPTZ values and shown as their suffix
    conversion : Optional[ColumnConversion], default=None
        Address rendering for VARBINARY/BINARY columns

    Returns:
    --------
    str
        Text of the value; values that cannot be rendered are logged and
        replaced with an empty string

    Raises:
    -------
    FormatError
        If an INTEGER column is not 1, 2, 4 or 8 bytes wide
    """
    if value is None:
        return ""

    try:
        return _FORMATTERS[column_type](value, tz_offset, conversion)
    except _WidthError as e:
        logger.warning("cannot format %s value %s: %s", column_type.name, value.hex().upper(), e)
    except OverflowError as e:
        logger.warning("%s value %s is out of range: %s", column_type.name, value.hex().upper(), e)
    return ""


def format_json_value(
    column_type: ColumnType,
    value: Optional[bytes],
    tz_offset: int = 0,
    conversion: Optional[ColumnConversion] = None,
) -> Any:
    """
    Format raw column bytes as a JSON-compatible value

    INTEGER and NUMERIC become ``int``, FLOAT becomes ``float``, BOOLEAN
    becomes ``bool`` and every other type is the same text produced by
    :func:`format_value`. Null columns become ``None``.
    """
    if value is None:
        return None

    if column_type is ColumnType.INTEGER:
        try:
            return le_int(value)
        except ValueError:
            raise FormatError(f"incorrect integer byte count: {len(value)}") from None

    text = format_value(column_type, value, tz_offset, conversion)

    if column_type is ColumnType.NUMERIC:
        return int(text) if text else 0

    if column_type is ColumnType.FLOAT:
        if not text:
            return None
        number = float(text)
        if not math.isfinite(number):
            logger.warning("FLOAT value %s has no JSON representation", text)
            return None
        return number

    if column_type is ColumnType.BOOLEAN:
        return text == "1" if text else None

    return text


def format_row(row: Row, schema: ColumnSchema, tz_offset: int = 0) -> list[str]:
    """Text of every column of a row, paired with the schema by position"""
    return [
        format_value(column.type, value, tz_offset, column.conversion)
        for value, column in zip(row.data, schema)
    ]


def format_json_row(row: Row, schema: ColumnSchema, tz_offset: int = 0) -> dict[str, Any]:
    """Mapping of column name to JSON value for a row"""
    return {
        column.name: format_json_value(column.type, value, tz_offset, column.conversion)
        for value, column in zip(row.data, schema)
    }
