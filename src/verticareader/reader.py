"""
Main functions for reading Vertica native binary files
"""

import logging
import os
from contextlib import contextmanager
from itertools import islice
from typing import Iterator, Optional, Union

import pandas as pd

from .formatting import format_json_value
from .rows import NativeFile
from .types import ColumnSchema
from .typespec import read_types
from .utils import ByteReader

logger = logging.getLogger(__name__)

SCAN_COLUMNS = ["filename", "version", "header_length", "columns", "variable_columns"]


def check_column_count(native: NativeFile, schema: ColumnSchema, filename: str) -> None:
    """Warn when the header and the types file disagree on the column count"""
    if native.definitions.number_of_columns != len(schema):
        logger.warning(
            "%s declares %d columns but the types file lists %d",
            filename, native.definitions.number_of_columns, len(schema),
        )


@contextmanager
def open_native(filename: str) -> Iterator[NativeFile]:
    """
    Open a native binary file for row-by-row reading

    Examples:
    ---------
    >>> from verticareader import open_native
    >>> with open_native("export.bin") as native:
    ...     for row in native:
    ...         print(row.null_values)

    Raises:
    -------
    FileNotFoundError
        If the file does not exist
    FormatError
        If the signature or column definitions are invalid
    """
    if not os.path.isfile(filename):
        raise FileNotFoundError(f"input file {filename} does not exist")

    with open(filename, "rb") as file:
        yield NativeFile(file)


def read_native(filename: str,
                types: Union[str, ColumnSchema],
                tz_offset: int = 0,
                limit: Optional[int] = None) -> pd.DataFrame:
    """
    Read a native binary file into a pandas DataFrame

    Parameters:
    -----------
    filename : str
        Path to the native binary file
    types : Union[str, ColumnSchema]
        Column types file, or an already parsed schema
    tz_offset : int, default=0
        Hours added to TIMESTAMPTZ values
    limit : Optional[int], default=None
        Only read the first ``limit`` rows

    Returns:
    --------
    pd.DataFrame
        One column per schema entry holding JSON-typed values (int, float,
        bool, str or None). Unnamed columns are called ``column_<index>``.

    Examples:
    ---------
    >>> import verticareader
    >>> df = verticareader.read_native("export.bin", "types.txt")
    >>> df = verticareader.read_native("export.bin", "types.txt", tz_offset=-5, limit=10)
    """
    schema = read_types(types) if isinstance(types, str) else types
    names = [name or f"column_{i}" for i, name in enumerate(schema.names)]

    with open_native(filename) as native:
        width = min(native.definitions.number_of_columns, len(schema))
        check_column_count(native, schema, filename)
        records = [
            [
                format_json_value(column.type, value, tz_offset, column.conversion)
                for value, column in zip(row.data, schema)
            ]
            for row in islice(native, limit)
        ]

    return pd.DataFrame(records, columns=names[:width], dtype=object)


def scan_directory(directory: str, recursive: bool = True) -> pd.DataFrame:
    """
    Scan a directory for native binary files and summarize their headers

    Parameters:
    -----------
    directory : str
        Directory to scan
    recursive : bool, default=True
        Whether to scan subdirectories recursively

    Returns:
    --------
    pd.DataFrame
        DataFrame with information about each ``.bin`` file that has a
        valid signature:
        - filename: Path to the file
        - version: Header version
        - header_length: Declared header length
        - columns: Number of columns
        - variable_columns: Number of variable-width columns
    """
    results = []

    for root, dirs, files in os.walk(directory):
        for file in sorted(files):
            if not file.lower().endswith(".bin"):
                continue
            file_path = os.path.join(root, file)
            try:
                with open(file_path, "rb") as f:
                    definitions = NativeFile(ByteReader(f)).definitions
            except (OSError, ValueError) as e:
                logger.warning("Error reading %s: %s", file_path, e)
                continue
            results.append({
                "filename": file_path,
                "version": definitions.version,
                "header_length": definitions.header_length,
                "columns": definitions.number_of_columns,
                "variable_columns": sum(
                    definitions.is_variable(i) for i in range(definitions.number_of_columns)
                ),
            })

        # If not recursive, break after first level
        if not recursive:
            break

    if results:
        return pd.DataFrame(results)
    return pd.DataFrame(columns=SCAN_COLUMNS)
