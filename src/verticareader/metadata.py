"""
Functions for reading the native file signature and column definitions
"""

import logging

from .constants import MAGIC_NATIVE
from .errors import FormatError
from .types import ColumnDefinitions
from .utils import ByteReader, check_magic

logger = logging.getLogger(__name__)


def read_signature(reader: ByteReader) -> bytes:
    """
    Read and validate the 11 byte file signature

    Raises:
    -------
    FormatError
        If the file is too short or the signature does not match
    """
    try:
        signature = reader.read(len(MAGIC_NATIVE))
    except EOFError as e:
        raise FormatError(f"header is invalid: {e}") from e

    if not check_magic(signature):
        raise FormatError("header is invalid")

    return signature


def read_column_definitions(reader: ByteReader) -> ColumnDefinitions:
    """
    Read the column definition header

    Parameters:
    -----------
    reader : ByteReader
        Cursor positioned right after the file signature

    Returns:
    --------
    ColumnDefinitions
        Header length, version and the declared width of every column
    """
    try:
        header_length = reader.read_u32()
        version = reader.read_u16()
        # Filler byte
        reader.read_u8()
        number_of_columns = reader.read_u16()
        column_widths = tuple(reader.read_u32() for _ in range(number_of_columns))
    except EOFError as e:
        raise FormatError(f"reading column definitions: {e}") from e

    definitions = ColumnDefinitions(
        header_length=header_length,
        version=version,
        number_of_columns=number_of_columns,
        column_widths=column_widths,
    )
    logger.debug("read column definitions: %s", definitions)
    return definitions


def read_metadata(reader: ByteReader) -> ColumnDefinitions:
    """Validate the signature and read the column definitions"""
    read_signature(reader)
    return read_column_definitions(reader)
