"""
Functions for reading the column types file

Each non-blank line describes one column as ``type[/name[/conversion]]``::

    Integer/IntCol
    varchar(32)/Name
    varbinary/Address/ipaddress
"""

import os
from typing import Iterable

from .errors import SchemaError
from .types import Column, ColumnConversion, ColumnSchema, ColumnType


def parse_column(line: str) -> Column:
    """
    Parse a single ``type[/name[/conversion]]`` line

    Raises:
    -------
    SchemaError
        If the type name is not recognized
    """
    chunks = [chunk.strip() for chunk in line.split("/")]

    column_type = ColumnType.from_string(chunks[0])
    name = chunks[1] if len(chunks) > 1 else ""
    conversion = ColumnConversion.from_string(chunks[2]) if len(chunks) > 2 else None

    return Column(type=column_type, name=name, conversion=conversion)


def parse_types(lines: Iterable[str]) -> ColumnSchema:
    """
    Build a column schema from the lines of a column types file

    Parameters:
    -----------
    lines : Iterable[str]
        Lines of the file; blank lines are skipped

    Returns:
    --------
    ColumnSchema
        Columns in file order
    """
    columns = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        columns.append(parse_column(line))
    return ColumnSchema(columns)


def read_types(filename: str) -> ColumnSchema:
    """
    Read a column types file

    Raises:
    -------
    FileNotFoundError
        If the file does not exist
    SchemaError
        If any line names an unknown type
    """
    if not os.path.isfile(filename):
        raise FileNotFoundError(f"Types file '{filename}' does not exist")

    with open(filename, "r", encoding="utf-8") as file:
        try:
            return parse_types(file)
        except SchemaError as e:
            raise SchemaError(f"parsing column types: {e}") from e
