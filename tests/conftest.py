"""
Pytest configuration
"""

import os
import struct
import sys
from datetime import datetime, timedelta

import pytest

# Add src directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from verticareader.constants import MAGIC_NATIVE, VARIABLE_WIDTH  # noqa: E402

EPOCH = datetime(2000, 1, 1)

ALL_TYPES = [
    "Integer/IntCol",
    "Float/FloatCol",
    "Char(10)/CharCol",
    "Varchar/VarcharCol",
    "Boolean/BoolCol",
    "Date/The_Date",
    "Timestamp/TimestampCol",
    "TimestampTz/TimestampTzCol",
    "Time/TimeCol",
    "TimeTz/TimeTzCol",
    "Varbinary/VarbinaryCol",
    "Binary(3)/BinaryCol",
    "Numeric(38,0)/NumericCol",
    "Interval/IntervalCol",
]

ALL_TYPE_WIDTHS = [8, 8, 10, VARIABLE_WIDTH, 1, 8, 8, 8, 8, 8, VARIABLE_WIDTH, 3, 24, 8]


def i64(value: int) -> bytes:
    return struct.pack("<q", value)


def microseconds(delta: timedelta) -> int:
    return delta // timedelta(microseconds=1)


def build_header(widths, version=1) -> bytes:
    """Signature plus column definitions for the given declared widths"""
    body = struct.pack("<HBH", version, 0, len(widths))
    body += b"".join(struct.pack("<I", w) for w in widths)
    return MAGIC_NATIVE + struct.pack("<I", len(body)) + body


def build_row(widths, values, row_length=None) -> bytes:
    """
    Encode one row; ``values`` holds bytes per column or None for null

    The row length prefix defaults to the number of bytes that follow it.
    """
    bitmap = bytearray((len(widths) + 7) // 8)
    body = b""
    for index, (width, value) in enumerate(zip(widths, values)):
        if value is None:
            bitmap[index // 8] |= 0x80 >> (index % 8)
            continue
        if width == VARIABLE_WIDTH:
            body += struct.pack("<I", len(value))
        body += value
    payload = bytes(bitmap) + body
    if row_length is None:
        row_length = len(payload)
    return struct.pack("<I", row_length) + payload


def build_native(widths, rows) -> bytes:
    return build_header(widths) + b"".join(build_row(widths, values) for values in rows)


def all_types_values() -> list[bytes]:
    timetz_zone = 19 * 3600  # +05
    timetz_us = microseconds(timedelta(hours=15, minutes=30))
    return [
        i64(1),
        struct.pack("<d", 3.14),
        b"one       ",
        "ONE \U0001F680".encode("utf-8"),
        b"\x01",
        i64((datetime(1999, 1, 8) - EPOCH).days),
        i64(microseconds(datetime(1999, 2, 11, 3, 17, 42) - EPOCH)),
        i64(microseconds(datetime(2016, 12, 25, 14, 0, 0) - EPOCH)),
        i64(microseconds(timedelta(hours=4, minutes=5, seconds=6))),
        struct.pack("<Q", (timetz_us << 24) | timetz_zone),
        b"\xab\x01\x00\xcd",
        b"\x0a\x0b\x0c",
        struct.pack("<QQQ", 0, 0, 123456789),
        i64(microseconds(timedelta(days=1, hours=2, minutes=3, seconds=4))),
    ]


@pytest.fixture
def all_types_bytes():
    """A native file with one row holding every column type"""
    return build_native(ALL_TYPE_WIDTHS, [all_types_values()])


@pytest.fixture
def all_types_file(tmp_path, all_types_bytes):
    path = tmp_path / "all-types.bin"
    path.write_bytes(all_types_bytes)
    return str(path)


@pytest.fixture
def all_types_with_nulls_file(tmp_path):
    values = all_types_values()
    with_nulls = [v if i % 2 == 0 else None for i, v in enumerate(values)]
    path = tmp_path / "all-types-with-nulls.bin"
    path.write_bytes(build_native(ALL_TYPE_WIDTHS, [values, with_nulls, [None] * len(values)]))
    return str(path)


@pytest.fixture
def types_file(tmp_path):
    """Write a column types file from a list of lines"""

    def _write(lines, name="types.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def all_types_names_file(types_file):
    return types_file(ALL_TYPES, "all-valid-types-with-names.txt")


@pytest.fixture
def all_types_no_names_file(types_file):
    return types_file([line.split("/")[0] for line in ALL_TYPES], "all-valid-types.txt")
