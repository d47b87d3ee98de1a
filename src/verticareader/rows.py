"""
Row decoding for Vertica native binary files

Each row is a u32 length, a null bitmap with one bit per column (most
significant bit first), then the bytes of every non-null column. Variable
width columns carry their own u32 length.
"""

import logging
from typing import BinaryIO, Iterator, Optional, Sequence, Union

from .constants import VARIABLE_WIDTH
from .metadata import read_metadata
from .types import ColumnDefinitions, Row
from .utils import ByteReader

logger = logging.getLogger(__name__)


def read_bitfield(reader: ByteReader, column_count: int) -> tuple[bool, ...]:
    """
    Read a row's null bitmap

    Parameters:
    -----------
    reader : ByteReader
        Cursor positioned at the start of the bitmap
    column_count : int
        Number of columns in the file

    Returns:
    --------
    tuple[bool, ...]
        One flag per column, True when the column is null
    """
    length = (column_count + 7) // 8
    bitfield = reader.read(length)

    null_values = []
    for byte in bitfield:
        for i in range(7, -1, -1):
            null_values.append(byte & (1 << i) != 0)

    # Padding bits in the last byte are ignored
    return tuple(null_values[:column_count])


def read_row(reader: ByteReader, column_widths: Sequence[int]) -> Row:
    """
    Read the bitmap and column bytes of one row

    The row length prefix must already have been consumed.

    Raises:
    -------
    EOFError
        If the stream ends in the middle of the row
    """
    null_values = read_bitfield(reader, len(column_widths))

    data: list[Optional[bytes]] = []
    for index, width in enumerate(column_widths):
        if null_values[index]:
            data.append(None)
            continue

        if width == VARIABLE_WIDTH:
            width = reader.read_u32()

        data.append(reader.read(width))

    return Row(null_values=null_values, data=tuple(data))


class NativeFile:
    """
    Iterator over the rows of a native binary file

    The signature and column definitions are read when the object is
    created. Rows are then decoded one at a time as the caller iterates.
    A zero row length or the end of the stream finishes iteration, and so
    does a row that cannot be read completely: there is no way to find the
    start of the next row once one is damaged.
    """

    def __init__(self, file: Union[BinaryIO, ByteReader]):
        self.reader = file if isinstance(file, ByteReader) else ByteReader(file)
        self.definitions: ColumnDefinitions = read_metadata(self.reader)
        self.rows_read = 0
        self._ended = False

    @property
    def column_widths(self) -> tuple[int, ...]:
        return self.definitions.column_widths

    @property
    def ended(self) -> bool:
        return self._ended

    def __iter__(self) -> Iterator[Row]:
        return self

    def __next__(self) -> Row:
        if self._ended:
            raise StopIteration

        try:
            # Read but not used to bound the row
            row_length = self.reader.read_u32()
        except EOFError:
            self._ended = True
            raise StopIteration

        if row_length == 0:
            self._ended = True
            raise StopIteration

        try:
            row = read_row(self.reader, self.column_widths)
        except EOFError as e:
            logger.error("reading data: row %d: %s", self.rows_read + 1, e)
            self._ended = True
            raise StopIteration

        self.rows_read += 1
        return row
